import os
import asyncio
import queue
import threading

from loguru import logger

from monerium_sdk import CancellationError, Client, ConfigError, OrdersNotificationsRequest, load_config

# how long to wait for the listener to report back after cancel
DRAIN_TIMEOUT = 10.0


def log_result(result) -> None:
    if result.ok:
        order = result.order
        logger.info("order {} kind={} amount={} {} state={}",
                    order.id, order.kind, order.amount, order.currency, order.state)
    else:
        logger.warning("{}", result.error)


def drain(results: queue.Queue) -> None:
    """Log pending results until the listener confirms cancellation."""
    while True:
        try:
            result = results.get(timeout=DRAIN_TIMEOUT)
        except queue.Empty:
            logger.error("order notifications did not confirm cancellation within {}s", DRAIN_TIMEOUT)
            return
        log_result(result)
        if not result.ok and isinstance(result.error, CancellationError):
            return


def stream(client: Client, profile_id: str) -> None:
    results: queue.Queue = queue.Queue()
    cancel = threading.Event()

    client.orders_notifications(cancel, OrdersNotificationsRequest(profile_id=profile_id), results)
    try:
        while True:
            try:
                result = results.get(timeout=0.5)
            except queue.Empty:
                continue
            log_result(result)
    except KeyboardInterrupt:
        logger.info("stopping order notifications")
        cancel.set()
        drain(results)


async def show_auth_context(client: Client) -> None:
    async with client:
        ctx = await client.get_auth_context()
        logger.info("authenticated as {} ({} profiles)", ctx.email or ctx.user_id, len(ctx.profiles))


def main() -> None:
    # file sink for every level
    try:
        os.makedirs("logs", exist_ok=True)
        logger.add(
            os.path.join("logs", "run_order_notifications.log"),
            level="DEBUG",
            rotation="10 MB",
            retention="14 days",
            encoding="utf-8",
            enqueue=True,
            backtrace=False,
            diagnose=False,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}",
        )
    except OSError as e:
        # keep stdout logging if the file sink cannot be created
        logger.warning("file logging disabled: {}", e)

    try:
        config = load_config(os.getenv("MONERIUM_CONFIG", "configs/monerium.yaml"))
    except ConfigError as e:
        raise SystemExit(str(e))

    profile_id = os.getenv("MONERIUM_PROFILE_ID", "")
    logger.info("monerium environment={}, profile={}, tick={}s",
                config.environment.name, profile_id or "<all>", config.notify_tick)

    client = Client.from_config(config)
    asyncio.run(show_auth_context(client))
    stream(client, profile_id)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("stopped by user")
