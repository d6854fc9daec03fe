"""Render structured results as the chat text players see."""

from maiden.models.dc_models import HighscoreReportModel, OutcomeKind, RollOutcomeModel


def render_dice(outcome: RollOutcomeModel) -> str:
    return ",".join(str(die) for die in outcome.dice)


def render_outcome(outcome: RollOutcomeModel) -> str:
    if outcome.kind == OutcomeKind.max_roll:
        return f"{outcome.decorated_name} MAX ROLL: `{render_dice(outcome)}` Result: {outcome.sum}"
    flavor = f" {outcome.flavor_text}" if outcome.flavor_text else ""
    speed = f" {outcome.speed_marker}" if outcome.speed_marker else ""
    return (
        f"{outcome.decorated_name} Roll: `{render_dice(outcome)}` Result: {outcome.sum}"
        f"{flavor}{outcome.trend_marker}{speed}"
    )


def render_highscore(report: HighscoreReportModel) -> str:
    count_descs = [
        f"{entry.decorated_name} ({entry.roll_count})" for entry in report.leaderboard.entries
    ]
    if report.leaderboard.total > 0:
        count_descs.append(f"Total: {report.leaderboard.total}")
    return "\n".join(
        [
            f"Today: {report.today.high_score or 0} by {report.today_name}",
            f"Yesterday: {report.yesterday.high_score or 0} by {report.yesterday_name}👑",
            f"All time: {report.all_time.high_score or 0} by {report.all_time_name}",
            f"Rolls: {', '.join(count_descs)}",
        ]
    )
