import os

from dotenv import load_dotenv

# local | development | testing | staging | production
ENVIRONMENT = os.getenv("ENVIRONMENT", "local").lower()

# .env.<environment> wins over a plain .env
for candidate in (f".env.{ENVIRONMENT}", ".env"):
    if os.path.exists(candidate):
        load_dotenv(dotenv_path=candidate)
        break

__all__ = ["ENVIRONMENT"]
