from .bot import BotConfig, LedgerBot
from .log import setup_logging


def main() -> None:
    setup_logging()
    config = BotConfig.from_env()
    bot = LedgerBot(config)
    bot.run()


if __name__ == '__main__':
    main()
