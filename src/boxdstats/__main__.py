"""Module entry point. Allows python -m boxdstats."""

from boxdstats.etl.pipeline.cli import main

if __name__ == "__main__":
    main()
