import json

import pytest
from pydantic import ValidationError

from check_annotator.errors import ReportFormatError
from check_annotator.report import Finding, load_report, parse_report

from conftest import findings_json


def test_load_report_keeps_order(write_report):
    findings = load_report(write_report(findings_json(3)))
    assert [f.file for f in findings] == ['src/mod0.py', 'src/mod1.py', 'src/mod2.py']
    assert findings[2] == Finding(file='src/mod2.py', line=3, message='problem 2', title='lint')


def test_empty_array_is_an_empty_report():
    assert parse_report('[]') == []


def test_findings_are_immutable():
    finding = parse_report('[{"file": "a.py", "line": 1, "message": "m", "title": "t"}]')[0]
    with pytest.raises(ValidationError):
        finding.line = 2


def test_invalid_json():
    with pytest.raises(ReportFormatError, match='not valid JSON'):
        parse_report('[{"file": ')


def test_top_level_must_be_array():
    with pytest.raises(ReportFormatError, match='JSON array'):
        parse_report('{"file": "a.py"}')


def test_missing_field_names_the_entry():
    with pytest.raises(ReportFormatError, match=r'1\.title'):
        parse_report('[{"file": "a.py", "line": 1, "message": "m", "title": "t"},'
                     ' {"file": "b.py", "line": 2, "message": "m"}]')


def test_line_must_be_positive():
    with pytest.raises(ReportFormatError, match='line'):
        parse_report('[{"file": "a.py", "line": 0, "message": "m", "title": "t"}]')


def test_missing_file(tmp_path):
    with pytest.raises(ReportFormatError, match='Cannot read report'):
        load_report(str(tmp_path / 'nope.json'))


def test_report_is_read_as_utf8(write_report):
    path = write_report('[{"file": "é.py", "line": 4, "message": "naïve", "title": "ü"}]')
    assert load_report(path)[0].message == 'naïve'


@pytest.mark.parametrize('line', ['"7"', 'true', '7.0'])
def test_line_must_be_a_json_integer(line):
    with pytest.raises(ReportFormatError, match='line'):
        parse_report(f'[{{"file": "a.py", "line": {line}, "message": "m", "title": "t"}}]')


@pytest.mark.parametrize('field', ['file', 'message', 'title'])
def test_text_fields_must_be_strings(field):
    entry = {'file': 'a.py', 'line': 1, 'message': 'm', 'title': 't', field: 12}
    with pytest.raises(ReportFormatError, match=field):
        parse_report(json.dumps([entry]))
