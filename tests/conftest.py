import json
from types import SimpleNamespace

import pytest


def check_run(id, name, status='in_progress'):
    return SimpleNamespace(id=id, name=name, status=status)


class FakeChecks:
    """Stands in for GitHubChecks and records every call in order.

    `listings` holds the result of each listing call; the last one repeats.
    An entry that is an exception instance is raised instead of returned.
    """

    def __init__(self, listings=None, update_error=None, fail_at=None):
        self.listings = listings or [[]]
        self.update_error = update_error
        self.fail_at = fail_at
        self.calls = []

    def list_check_runs(self, ref, workflow=None, status='in_progress'):
        self.calls.append(('list', ref, workflow, status))
        result = self.listings[min(len(self.lists) - 1, len(self.listings) - 1)]
        if isinstance(result, Exception):
            raise result
        return list(result)

    def update_check_run(self, check_run_id, output):
        self.calls.append(('update', check_run_id, output))
        if self.fail_at is not None and len(self.updates) == self.fail_at:
            raise self.update_error

    @property
    def lists(self):
        return [c for c in self.calls if c[0] == 'list']

    @property
    def updates(self):
        return [c for c in self.calls if c[0] == 'update']


def findings_json(count):
    return json.dumps([
        {'file': f'src/mod{i}.py', 'line': i + 1, 'message': f'problem {i}', 'title': 'lint'}
        for i in range(count)
    ])


@pytest.fixture
def write_report(tmp_path):
    def _write(content, name='report.json'):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
