import logging
import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./organizations.db")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRY_MINUTES = data.get("JWT_EXPIRY_MINUTES", 15)
    # null = invitations never expire
    INVITATION_EXPIRY_DAYS = data.get("INVITATION_EXPIRY_DAYS", 7)
    DEFAULT_INVITATION_ROLE = data.get("DEFAULT_INVITATION_ROLE", "member")
    MAX_ORGANIZATIONS_PER_USER = data.get("MAX_ORGANIZATIONS_PER_USER", None)
    # [{name, inherits, capabilities}]
    CUSTOM_ROLES = data.get("CUSTOM_ROLES", [])


def configure_logging(level: str = ApplicationConfig.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
