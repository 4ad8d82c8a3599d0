import time
import logging
import signal
import argparse

from core.app_context import AppContext
from core.config_loader import get_config
from database.init_db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
running = True


def signal_handler(sig, frame):
    global running
    logger.info("Shutdown signal received")
    running = False


def run_backfill_cycle(ctx: AppContext, batch_size: int) -> int:
    """Embed one batch of rows without embeddings. Returns rows embedded."""
    with ctx.uow() as repos:
        result = ctx.embedding_service.backfill(repos, limit=batch_size)
    for error in result.errors:
        logger.warning(f"Backfill error: {error}")
    return result.volunteers + result.vacancies


def run_backfill(batch_size: int, interval: int, loop: bool) -> None:
    from database.database import SessionLocal

    ctx = AppContext.build(get_config(), SessionLocal)
    if ctx.embedding_service is None:
        logger.error("No LLM API key configured; set LLM_API_KEY to enable embeddings")
        return

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    cycle_count = 0
    while running:
        cycle_count += 1
        cycle_start = time.time()
        try:
            embedded = run_backfill_cycle(ctx, batch_size)
        except Exception as e:
            logger.error(f"Error in backfill cycle: {e}", exc_info=True)
            embedded = 0

        cycle_elapsed = time.time() - cycle_start
        logger.info(f"=== Backfill cycle #{cycle_count}: {embedded} rows in {cycle_elapsed:.2f}s ===")

        if not loop:
            break
        # A full batch means more rows are probably waiting
        if embedded >= batch_size:
            continue
        # Sleep in chunks to allow responsive shutdown
        for _ in range(max(1, interval // 5)):
            if not running:
                break
            time.sleep(5)

    ctx.side_effect_runner.shutdown()


def main():
    parser = argparse.ArgumentParser(description="VolunteerMatch Driver")
    parser.add_argument('--mode', type=str, choices=['serve', 'init-db', 'backfill'], default='serve',
                        help='serve (default): run the API; init-db: create schema; backfill: embed missing rows')
    parser.add_argument('--batch-size', type=int, default=50, help='Rows per entity type per backfill cycle')
    parser.add_argument('--interval', type=int, default=300, help='Seconds between backfill cycles')
    parser.add_argument('--loop', action='store_true', help='Keep backfilling until stopped')
    args = parser.parse_args()

    logger.info(f"Driver starting in {args.mode.upper()} mode...")

    # Initialize DB (with retry logic)
    init_db()

    if args.mode == 'serve':
        from web.backend.app import main as serve
        serve()
    elif args.mode == 'backfill':
        run_backfill(args.batch_size, args.interval, args.loop)


if __name__ == "__main__":
    main()
