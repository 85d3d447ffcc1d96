"""
Apparel Designer - Main Entry Point

Garment design canvas: place text and graphics on a product silhouette,
then save the design or export it for print.

Usage:
    python -m apparel_designer.main [--product NAME]
"""

import argparse
import logging
import sys
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

from .config import Config
from .core.product import DEFAULT_CATALOG, find_product
from .utils.logging_config import PACKAGE_LOGGER, LoggingConfig


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='apparel-designer', description=Config.APP_NAME)
    parser.add_argument(
        '--product',
        help="Product name or id to start with (e.g. 'Team Hoodie' or 'singlet')",
    )
    parser.add_argument(
        '--debug', action='store_true',
        help="Show debug messages on the console",
    )
    parser.add_argument(
        '--version', action='version', version=f"%(prog)s {Config.APP_VERSION}",
    )
    return parser.parse_args(argv)


def setup_application(argv: Optional[List[str]] = None) -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)

    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    return app


def main(argv: Optional[List[str]] = None):
    """
    Main entry point for Apparel Designer

    Creates the application, sets up the design window, and runs the event loop.
    """
    args = parse_args(argv)

    # Setup logging first
    LoggingConfig.setup_logging(
        Config.get_log_dir(),
        console_level=logging.DEBUG if args.debug else logging.INFO,
    )

    logger = LoggingConfig.get_logger(f"{PACKAGE_LOGGER}.main")
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")
    logger.info(f"Designs: {Config.get_designs_dir()}")

    product_ref = args.product or Config.load_setting('last_product')
    product = None
    if product_ref:
        lookup = int(product_ref) if str(product_ref).isdigit() else product_ref
        product = find_product(DEFAULT_CATALOG, lookup)
        if product is None:
            logger.warning(f"Unknown product '{product_ref}', using the first catalog product")

    app = setup_application()

    # Create and show design window
    from .widgets.design_window import DesignWindow
    window = DesignWindow(product=product)
    window.show()

    logger.info("Application started successfully!")

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
