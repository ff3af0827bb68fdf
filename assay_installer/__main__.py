"""Allow ``python -m assay_installer``."""

from assay_installer.cli.app import main

if __name__ == "__main__":
    main()
