# resolver.py - find the in-progress check run that belongs to this job
import time
from dataclasses import dataclass

import requests
from github import GithubException

from check_annotator.errors import ResolutionError


@dataclass(frozen=True)
class CheckRunRef:
    id: int
    name: str


def backoff_delays(max_attempts, retry_delay=1.0, max_retry_delay=10.0, factor=2.0):
    """Yield the pause before each retry: exponential, capped at max_retry_delay."""
    delay = retry_delay
    for _ in range(max_attempts - 1):
        yield min(delay, max_retry_delay)
        delay *= factor


def match_check_run(check_runs, name_fragment):
    """Return the in-progress runs whose name contains name_fragment, in listing order."""
    return [cr for cr in check_runs
            if getattr(cr, 'status', 'in_progress') == 'in_progress' and name_fragment in cr.name]


def _is_transient(ex):
    if isinstance(ex, requests.RequestException):
        return True
    return isinstance(ex, GithubException) and (ex.status is None or ex.status >= 500)


def resolve_check_run(client, commit_ref, workflow, name_fragment, max_attempts=50,
                      retry_delay=1.0, max_retry_delay=10.0, sleep=time.sleep):
    """Poll the check-run listing for `commit_ref` until our run shows up.

    A freshly started job is not always listed yet, so an empty result is
    retried with backoff. Runs that finished in the meantime are ignored.
    """
    if max_attempts < 1:
        raise ValueError(f'max_attempts must be positive, got {max_attempts}')
    if not 0 < retry_delay <= max_retry_delay:
        raise ValueError(f'retry delays must satisfy 0 < retry_delay <= max_retry_delay, '
                         f'got {retry_delay} and {max_retry_delay}')
    delays = backoff_delays(max_attempts, retry_delay, max_retry_delay)
    for attempt in range(1, max_attempts + 1):
        try:
            runs = client.list_check_runs(commit_ref, workflow=workflow, status='in_progress')
        except (GithubException, requests.RequestException) as ex:
            if not _is_transient(ex):
                raise ResolutionError(f'Listing check runs for {commit_ref} failed: {ex}') from ex
            print(f'Listing check runs failed on attempt {attempt}/{max_attempts}: {ex}')
            runs = []
        matches = match_check_run(runs, name_fragment)
        if matches:
            if len(matches) > 1:
                names = ', '.join(f'{cr.name} ({cr.id})' for cr in matches)
                print(f'::warning::Several in-progress check runs match {name_fragment!r}: {names}; using the first')
            found = matches[0]
            print(f'Found check run {found.name!r} with id {found.id} after {attempt} attempt(s)')
            return CheckRunRef(id=found.id, name=found.name)
        if attempt < max_attempts:
            delay = next(delays)
            print(f'No in-progress check run matching {name_fragment!r} on {commit_ref} yet, retrying in {delay:g}s')
            sleep(delay)
    raise ResolutionError(f'check run not found after {max_attempts} attempts')
