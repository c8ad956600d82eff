# github_api.py - Authenticate with the job token and wrap the Checks API calls we need
from github import Auth, Github

DEFAULT_API_URL = 'https://api.github.com'


def get_client(token, base_url=None):
    """Return a PyGithub client for the job token; base_url points at GHES when set."""
    base_url = base_url or DEFAULT_API_URL
    return Github(base_url=base_url, auth=Auth.Token(token))


class GitHubChecks:
    """Check-run listing and updates for one repository.

    Check runs seen while listing are kept so the update calls that follow
    do not have to fetch them again.
    """

    def __init__(self, gh_client, repository):
        self._repo = gh_client.get_repo(repository, lazy=True)
        self._commits = {}
        self._check_runs = {}

    def list_check_runs(self, ref, workflow=None, status='in_progress'):
        """Return check runs on `ref` with the given status, in API order.

        `workflow` is not applied: the REST endpoint has no workflow filter,
        so every matching run on the commit is returned and the caller has
        to tell jobs apart by name.
        """
        commit = self._commits.get(ref)
        if commit is None:
            commit = self._commits[ref] = self._repo.get_commit(ref)
        runs = list(commit.get_check_runs(status=status))
        for run in runs:
            self._check_runs[run.id] = run
        return runs

    def update_check_run(self, check_run_id, output):
        run = self._check_runs.get(check_run_id)
        if run is None:
            run = self._check_runs[check_run_id] = self._repo.get_check_run(check_run_id)
        run.edit(output=output)
        return run


def get_checks_client(token, repository, base_url=None):
    return GitHubChecks(get_client(token, base_url), repository)
