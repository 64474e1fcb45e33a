"""
Application Initialization
==========================
Loads the dataset, builds the main window and starts the Qt event loop.

Usage:
    $ python -m cityblocks [path-or-url-to-csv]
"""
import logging
import sys
from typing import Optional

from cityblocks.application import create_app
from cityblocks.logging_config import setup_logging
from cityblocks.model.io import DatasetLoader, DatasetLoadError
from cityblocks.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main(source: Optional[str] = None) -> int:
    # Use logging.DEBUG to see every rejected CSV row
    setup_logging()

    if source is None and len(sys.argv) > 1:
        source = sys.argv[1]

    app = create_app()

    # The whole dataset is loaded before the first frame is drawn
    try:
        dataset = DatasetLoader.load(source)
    except DatasetLoadError as e:
        window = MainWindow(None)
        window.show()
        window.show_error(str(e))
        return app.exec()

    window = MainWindow(dataset)
    window.show()
    window.start()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
