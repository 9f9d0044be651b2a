#!filepath: wle_report/config/data_config.py
from typing import List, Optional

from pydantic import BaseModel, Field


class DataConfig(BaseModel):
    """
    Raw table layout.

    index_col: leading row-number column of the CSV, becomes the row index.
    identifier_columns: bookkeeping block dropped by name (never by position).
    """

    training_file: str = "data/pml-training.csv"
    testing_file: str = "data/pml-testing.csv"

    index_col: Optional[int] = 0
    missing_markers: List[str] = Field(default_factory=lambda: ["NA"])

    outcome_column: str = "classe"
    outcome_classes: Optional[List[str]] = None
    row_id_column: str = "problem_id"
    subject_column: str = "user_name"

    identifier_columns: List[str] = Field(
        default_factory=lambda: [
            "user_name",
            "raw_timestamp_part_1",
            "raw_timestamp_part_2",
            "cvtd_timestamp",
            "new_window",
            "num_window",
        ]
    )
