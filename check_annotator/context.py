# context.py - the trigger context of the current workflow run
import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from check_annotator.errors import ContextError
from check_annotator.github_api import DEFAULT_API_URL

PULL_REQUEST_EVENTS = ('pull_request', 'pull_request_target')


@dataclass(frozen=True)
class TriggerContext:
    """What started this job. Built once in main() and passed around."""
    event_name: str
    sha: Optional[str]
    repository: str
    workflow: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    api_url: str = DEFAULT_API_URL

    def __post_init__(self):
        object.__setattr__(self, 'payload', MappingProxyType(dict(self.payload)))

    @property
    def owner(self):
        return self.repository.split('/', 1)[0]

    @property
    def repo(self):
        return self.repository.split('/', 1)[-1]

    def commit_ref(self):
        """Return the commit SHA whose check runs belong to this job.

        Pull request events run on a merge commit, so the check runs live on
        the pull request head instead; `after` covers payloads without one.
        """
        if self.event_name in PULL_REQUEST_EVENTS:
            head = (self.payload.get('pull_request') or {}).get('head') or {}
            ref = head.get('sha') or self.payload.get('after')
        else:
            ref = self.sha
        if not ref:
            raise ContextError(f'Cannot determine the commit SHA for a {self.event_name or "unknown"} event')
        return ref

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        repository = environ.get('GITHUB_REPOSITORY', '')
        if '/' not in repository:
            raise ContextError('GITHUB_REPOSITORY must be set as owner/repo')
        return cls(
            event_name=environ.get('GITHUB_EVENT_NAME', ''),
            sha=environ.get('GITHUB_SHA') or None,
            repository=repository,
            workflow=environ.get('GITHUB_WORKFLOW', ''),
            payload=read_event_payload(environ.get('GITHUB_EVENT_PATH')),
            api_url=environ.get('GITHUB_API_URL') or DEFAULT_API_URL,
        )


def read_event_payload(event_path):
    if not event_path or not os.path.exists(event_path):
        return {}
    try:
        with open(event_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise ContextError(f'Cannot read event payload {event_path}: {ex}') from ex
    if not isinstance(payload, dict):
        raise ContextError(f'Event payload {event_path} is not a JSON object')
    return payload
