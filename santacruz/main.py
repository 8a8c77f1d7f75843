import argparse


def parse_args(argv=None) -> argparse.Namespace:
    from santacruz.config import DEFAULT_SEED, MAP_WIDTH, MAP_HEIGHT, PREVIEW_SCALE

    parser = argparse.ArgumentParser(
        prog="santacruz-worldgen",
        description="Generate the Santa Cruz tile world and report on it.",
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="PRNG seed")
    parser.add_argument("--width", type=int, default=MAP_WIDTH, help="grid width in tiles")
    parser.add_argument("--height", type=int, default=MAP_HEIGHT, help="grid height in tiles")
    parser.add_argument("--preview", default=None, help="write a PNG preview to this path")
    parser.add_argument("--scale", type=int, default=PREVIEW_SCALE, help="preview pixels per tile")
    parser.add_argument("--no-lights", action="store_true", help="omit lights from the preview")
    parser.add_argument("--no-log-files", action="store_true", help="log to the console only")
    return parser.parse_args(argv)


def run(args: argparse.Namespace):
    # ---------------------------
    # LAZY IMPORTS
    # ---------------------------
    from santacruz.config import get_logger
    from santacruz.world import WorldConfig, WorldGenerator

    logger = get_logger(__name__)

    config = WorldConfig(width=args.width, height=args.height, seed=args.seed)
    world = WorldGenerator(config).generate()

    stats = world.stats
    logger.info(f"Tiles: {dict(stats['tiles'])}")
    logger.info(f"Lights: {dict(stats['lights'])}")
    logger.info(f"Reachable from spawn: {stats['connectivity']:.2%}")

    if args.preview:
        from santacruz.world.preview import save_preview
        save_preview(world, args.preview, scale=args.scale, lights=not args.no_lights)

    return world


def main(argv=None):
    import logging
    import sys
    from santacruz.config import get_project_root, setup_logging, get_logger

    args = parse_args(argv)

    if args.no_log_files:
        logging.basicConfig(
            level=logging.INFO,
            format='[%(asctime)s] - [%(name)s] - [%(levelname)s] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            handlers=[logging.StreamHandler(sys.stdout)],
        )
        logger = get_logger()
    else:
        logger = setup_logging(get_project_root())

    logger.info("=" * 60)
    logger.info(f"World generation started (seed={args.seed}, {args.width}x{args.height})")

    try:
        run(args)
    except Exception as e:
        logger.critical(f"Critical error in world generation: {e}", exc_info=True)
        raise
    finally:
        logger.info("World generation finished")
        logger.info("=" * 60)


# ------------------------ # ENTRY POINT # ------------------------

if __name__ == "__main__":
    main()
