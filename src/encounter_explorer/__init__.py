"""
Encounter Explorer - Tabular Analysis of Diabetic Encounter Records.

Loads the "Diabetes 130-US hospitals" encounter file (``?`` marks a
missing value) and runs four analyses over it, each configured in YAML:
a preview of the first rows, a grouped statistic such as mean length of
stay by race and gender, a predicate row filter, and a boxplot of one
numeric column by a categorical one.

Subpackages:
    - adapters: CSV reader, console audit logger, metrics collector
    - aggregation, filters, plotting: the analysis stages
    - pipeline: runs the enabled stages over one loaded table
    - validation: column and data-quality checks before the stages run
    - config, domain: settings and result types

Example:
    >>> from encounter_explorer.pipeline import create_pipeline
    >>> report = create_pipeline(config_path="config/default.yaml").run()
    >>> report.aggregation.table.head()

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Send log records from the analysis stages to stderr.

    Without this, only the console audit lines and records at WARNING or
    above show up. With ``logging.DEBUG`` every stage reports row counts.

    Args:
        level: Level for the root and ``encounter_explorer`` loggers
        format: Record format passed to ``logging.basicConfig``
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("encounter_explorer").setLevel(level)
