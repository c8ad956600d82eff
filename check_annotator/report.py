# report.py - load findings from the JSON report produced earlier in the job
import json

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from check_annotator.errors import ReportFormatError


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: StrictStr
    line: StrictInt = Field(gt=0)
    message: StrictStr
    title: StrictStr


_REPORT = TypeAdapter(list[Finding])


def parse_report(text):
    """Parse report JSON text into a list of Findings, keeping order."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as ex:
        raise ReportFormatError(f'Report is not valid JSON: {ex}') from ex
    if not isinstance(data, list):
        raise ReportFormatError(f'Report must be a JSON array, got {type(data).__name__}')
    try:
        return _REPORT.validate_python(data)
    except ValidationError as ex:
        first = ex.errors()[0]
        where = '.'.join(str(p) for p in first['loc'])
        raise ReportFormatError(f'Invalid report entry at {where}: {first["msg"]}') from ex


def load_report(report_path):
    try:
        with open(report_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        raise ReportFormatError(f'Cannot read report {report_path}: {ex}') from ex
    return parse_report(text)
