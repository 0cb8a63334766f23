"""Report assembly.

Pure merge of the aggregator outputs into a StatsReport. Sections not
provided keep their zero/empty defaults.
"""

from typing import Any

from boxdstats.etl.aggregation.schemas import StatsReport


def assemble_report(**sections: Any) -> StatsReport:
    """Merge computed sections into the final report.

    Args:
        **sections: Report fields by snake_case name
            (e.g. total_movies=12, top_genres=[...]).

    Returns:
        Validated report.

    Raises:
        pydantic.ValidationError: On unknown section names or bad values.
    """
    return StatsReport.model_validate(sections)
