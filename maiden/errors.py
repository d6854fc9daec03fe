class MaidenError(Exception):
    """Base class for errors raised by the dice game."""


class ConsecutiveTurnRejection(MaidenError):
    """The player rolled last and nobody has rolled since.

    This is an expected, user-facing rejection. It is raised before any
    state is touched.
    """

    message = "The dice are hot!"

    def __init__(self, arena: str, player_id: str):
        super().__init__(self.message)
        self.arena = arena
        self.player_id = player_id
