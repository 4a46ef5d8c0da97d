"""Bot configuration dataclass."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class BotConfig:
    token: str
    admin_id: Optional[int] = None
    db_path: str = "money.db"
    export_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Build the config from the environment (and a local .env file)."""
        load_dotenv()
        token = os.getenv("BOT_TOKEN") or os.getenv("TELEGRAM_BOT_TOKEN")
        if not token:
            raise ValueError(
                "❌ BOT_TOKEN not set.\nGet it from @BotFather and export BOT_TOKEN='your-token'",
            )
        admin_raw = os.getenv("ADMIN_ID", "").strip()
        try:
            admin_id = int(admin_raw) if admin_raw else None
        except ValueError as exc:
            raise ValueError(f"ADMIN_ID must be numeric, got {admin_raw!r}") from exc
        return cls(
            token=token,
            admin_id=admin_id,
            db_path=os.getenv("DB_PATH", "money.db"),
            export_dir=os.getenv("EXPORT_DIR") or None,
        )


__all__ = ["BotConfig"]
