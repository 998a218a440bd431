"""Entry point for the routine planner desktop application."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from config_manager import config
from logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Routine Planner - plan a day on a 24-hour timeline')
    parser.add_argument('file', nargs='?',
                        help='JSON schedule to import at start-up')
    parser.add_argument('--no-autosave', action='store_true',
                        help='Do not restore or write the autosave file')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the GUI application."""
    args = parse_args(argv)

    # Initialize centralized logging (suppresses console noise, logs to file)
    setup_logging()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Imported after logging is configured so start-up messages are captured
    from controllers import ApplicationController
    from planner_view import PlannerView
    from serialization import DocumentFormatError
    from ui.dialogs import show_import_failed

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    app.setApplicationName(config.get_string("app", "name"))

    controller = ApplicationController(autosave=False if args.no_autosave else None)
    window = PlannerView(controller)
    window.show()

    if args.file:
        try:
            controller.import_document_from_file(args.file)
        except (OSError, DocumentFormatError) as e:
            show_import_failed(window, str(e))

    logger.info("Routine Planner ready with %d tasks", len(controller.task_list))
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
