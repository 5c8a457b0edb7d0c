from pathlib import Path

from dotenv import load_dotenv

root = Path(__file__).resolve().parents[2]
# Optional overrides for local runs; CI relies on the defaults in server.config.
load_dotenv(root / ".env.test", override=False)
