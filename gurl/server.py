"""Server entrypoint: run the redirect and management listeners.

Procedure:
    - Step 1: Load configuration (defaults < environment < flags)
    - Step 2: Initialize logging
    - Step 3: Open the link store (fatal on failure)
    - Step 4: Serve both surfaces from one event loop until SIGINT/SIGTERM
    - Step 5: Close the link store

Both listeners are supervised together: a shutdown signal stops both, and if
one listener stops on its own the other is stopped too and the process exits
with status 1.

Usage:
    gurl --api-address :7070 --redirect-address :8090 --database links.db
    python -m gurl
"""

import sys
import signal
import asyncio
import logging
import contextlib
from collections.abc import Sequence

import uvicorn

from gurl.dao import LinkSQLiteDAO
from gurl.dao.exceptions import StoreOpenError
from gurl.exceptions import ConfigurationError
from gurl.servers import create_management_app, create_redirect_app
from gurl.utils.config import Address, load_config
from gurl.utils.logging import initialize_logging


logger = logging.getLogger(__name__)


class SupervisedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the supervisor."""

    @contextlib.contextmanager
    def capture_signals(self):
        yield

    def install_signal_handlers(self) -> None:
        pass


def build_server(app, address: Address) -> SupervisedServer:
    config = uvicorn.Config(
        app,
        host=address.host,
        port=address.port,
        log_config=None,
        lifespan='off',
        access_log=True,
    )
    return SupervisedServer(config)


async def supervise(servers: dict[str, uvicorn.Server]) -> bool:
    """Serve until a shutdown signal arrives or any server stops.

    Returns:
        bool: True if the servers were stopped by a signal, False if one of them stopped
        on its own or crashed. Crashes are logged with their traceback.
    """
    loop = asyncio.get_running_loop()
    signalled = asyncio.Event()

    def stop_all() -> None:
        for server in servers.values():
            server.should_exit = True

    def on_signal(signum: signal.Signals) -> None:
        logger.info('Received %s. Stopping servers.', signum.name)
        signalled.set()
        stop_all()

    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, on_signal, signum)

    tasks = {asyncio.create_task(server.serve(), name=name) for name, server in servers.items()}
    for name, server in servers.items():
        logger.info('Start http server at %s', f'{server.config.host}:{server.config.port}', extra={'server': name})

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        if not signalled.is_set():
            logger.error('Server %s stopped unexpectedly. Stopping the others.', next(iter(done)).get_name())
            stop_all()
        await asyncio.gather(*pending, return_exceptions=True)
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(signum)

    failed = False
    for task in tasks:
        if task.exception() is not None:
            failed = True
            logger.error('Server %s crashed.', task.get_name(), exc_info=task.exception(), extra={'server': task.get_name()})
    return signalled.is_set() and not failed


def main(argv: Sequence[str] | None = None) -> int:
    try:
        config = load_config(argv)
    except ConfigurationError:
        initialize_logging()
        logger.critical('Invalid configuration. Exiting.', exc_info=True)
        return 1

    initialize_logging(config.log_level)

    try:
        dao = LinkSQLiteDAO(database=config.database, write_timeout=config.write_timeout)
    except StoreOpenError:
        logger.critical('Db connection failed. Exiting.', exc_info=True, extra={'database': config.database})
        return 1

    logger.info('Opened link store.', extra={'database': config.database})
    try:
        servers = {
            'redirect': build_server(create_redirect_app(dao), config.redirect_address),
            'api': build_server(create_management_app(dao), config.api_address),
        }
        clean_exit = asyncio.run(supervise(servers))
    finally:
        dao.close()
        logger.info('Closed link store.', extra={'database': config.database})

    return 0 if clean_exit else 1


if __name__ == '__main__':
    sys.exit(main())
