import logging
from typing import List, Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from ..constants import EXPORT_CAPTION, EXPORT_FAILED_TEXT
from ..database import LedgerStore
from ..errors import DeliveryError
from .config import BotConfig
from .keyboards import KeyboardFactory
from .reports import CsvExport, export_file
from .router import Reply, Router

logger = logging.getLogger(__name__)


class LedgerBot:
    """Telegram front-end: turns updates into router calls and replies."""

    def __init__(self, config: BotConfig, router: Optional[Router] = None):
        self.config = config
        self.router = router or Router(LedgerStore(db_path=config.db_path), admin_id=config.admin_id)
        self.keyboards = KeyboardFactory()
        # One update at a time keeps each identity's dialogue strictly ordered.
        self.application = Application.builder().token(config.token).concurrent_updates(False).build()

    def setup(self) -> None:
        self._register_handlers()

    def run(self) -> None:
        self.setup()
        if self.config.admin_id is None:
            logger.warning("ADMIN_ID not set; 'reset all' is disabled")
        else:
            logger.info("Admin identity: %s", self.config.admin_id)
        logger.info("Starting bot (long polling)...")
        self.application.run_polling(drop_pending_updates=True)

    def _register_handlers(self) -> None:
        app = self.application
        app.add_handler(CommandHandler("start", self.start))
        app.add_handler(CommandHandler("help", self.help))
        app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_text))
        # Stickers, photos and unknown /commands still count as first contact.
        app.add_handler(MessageHandler(filters.ALL, self.handle_other))
        app.add_error_handler(self.error_handler)

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._respond(update, "/start")

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._respond(update, "/help")

    async def handle_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._respond(update, update.message.text or "")

    async def handle_other(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if not user or not update.effective_message:
            return
        await self._send(update, self.router.touch(user.id))

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Unhandled error", exc_info=context.error)

    async def _respond(self, update: Update, text: str) -> None:
        user = update.effective_user
        if not user or not update.message:
            return
        replies = self.router.handle(user.id, text)
        await self._send(update, replies)

    async def _send(self, update: Update, replies: List[Reply]) -> None:
        message = update.effective_message
        for reply in replies:
            if reply.document is not None:
                try:
                    await self._deliver_export(update, reply.document)
                except DeliveryError:
                    logger.exception("Export delivery failed for %s", update.effective_user.id)
                    await message.reply_text(EXPORT_FAILED_TEXT)
                continue
            await message.reply_text(
                reply.text,
                parse_mode=reply.parse_mode,
                reply_markup=self.keyboards.for_hint(reply.keyboard),
            )

    async def _deliver_export(self, update: Update, export: CsvExport) -> None:
        try:
            with export_file(export, self.config.export_dir) as path:
                with open(path, 'rb') as f:
                    await update.effective_message.reply_document(
                        document=f,
                        filename=export.filename,
                        caption=EXPORT_CAPTION,
                    )
        except (TelegramError, OSError) as exc:
            raise DeliveryError(str(exc)) from exc


__all__ = ["LedgerBot"]
