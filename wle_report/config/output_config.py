#!filepath: wle_report/config/output_config.py
from pydantic import BaseModel


class OutputConfig(BaseModel):
    dir: str = "output"
    write_answer_files: bool = False
