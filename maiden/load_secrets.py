import os
from dotenv import load_dotenv

load_dotenv()

redis_host = os.getenv("REDIS_HOST", "redis")
redis_port = int(os.getenv("REDIS_PORT", "6379"))
redis_password = os.getenv("REDIS_PASSWORD")
fast_emoji = os.getenv("FAST_EMOJI", "💨")
fast_cooldown = int(os.getenv("FAST_COOLDOWN", "3"))
rolls_dir = os.getenv("ROLLS_DIR", os.path.join("web", "public", "rolls"))

if __name__ == "__main__":
    print(redis_host, redis_port, fast_emoji, fast_cooldown, rolls_dir)
