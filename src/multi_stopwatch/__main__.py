import argparse
import logging

from .broadcaster import UpdateBroadcaster
from .clock import MonotonicClock
from .commands import CommandDispatcher
from .config import Settings, setupLogging
from .console import Console
from .registry import TimerRegistry

log = logging.getLogger(__name__)

def parseArgs(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='multi-stopwatch',
        description='Run several named stopwatches side by side.',
    )
    parser.add_argument('--console', action='store_true', help='line-based prompt instead of the full-screen UI')
    parser.add_argument('--interval', type=float, help='display refresh period in seconds')
    parser.add_argument('--log-file', help='write logs to this file')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ...')
    parser.add_argument('--env-file', help='.env file with STOPWATCH_* settings')
    return parser.parse_args(argv)

def loadSettings(args: argparse.Namespace) -> Settings:
    settings = Settings.fromEnv(args.env_file)
    overrides = {
        'poll_interval': args.interval,
        'log_file': args.log_file,
        'log_level': args.log_level,
    }
    return Settings.model_validate({
        **settings.model_dump(),
        **{k: v for k, v in overrides.items() if v is not None},
    })

def main(argv: list[str] | None = None) -> None:
    args = parseArgs(argv)
    settings = loadSettings(args)
    setupLogging(settings, tui=not args.console)
    log.info('Polling every %s s.', settings.poll_interval)

    broadcaster = UpdateBroadcaster(MonotonicClock(), settings.poll_interval)
    registry = TimerRegistry(broadcaster, join_timeout=settings.join_timeout)
    dispatcher = CommandDispatcher(registry)
    if args.console:
        Console(dispatcher).run()
    else:
        from .UI import UI
        UI(registry, dispatcher).run()

if __name__ == '__main__':
    main()
