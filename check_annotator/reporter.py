# reporter.py - push findings to the check run as annotations, one batch per request
from dataclasses import dataclass

import requests
from github import GithubException

from check_annotator.errors import PublishError

ANNOTATION_LEVEL = 'failure'


@dataclass(frozen=True)
class PublishReport:
    check_run_id: int
    batches: int
    annotations: int


def to_annotation(finding):
    return {
        'path': finding.file,
        'start_line': finding.line,
        'end_line': finding.line,
        'annotation_level': ANNOTATION_LEVEL,
        'message': finding.message,
        'title': finding.title,
    }


def build_output(annotations, title_context):
    return {
        'title': f'{title_context} Check Run',
        'summary': f'{len(annotations)} error(s) found',
        'annotations': annotations,
    }


def publish_annotations(client, check_run, batches, title_context):
    """Send each batch to the check run, strictly one request after another.

    GitHub appends the annotations of every update to the run, so running
    this twice for the same check run shows every finding twice. A failed
    request stops publishing; batches already sent stay on the run.
    """
    batches = list(batches)
    total = sum(len(b) for b in batches)
    print(f'Adding {total} error(s) as annotations to check run with id {check_run.id}')

    sent = 0
    for index, findings in enumerate(batches, start=1):
        annotations = [to_annotation(f) for f in findings]
        try:
            client.update_check_run(check_run.id, build_output(annotations, title_context))
        except (GithubException, requests.RequestException) as ex:
            raise PublishError(
                f'Updating check run {check_run.id} failed on batch {index}/{len(batches)} '
                f'({sent} of {total} annotations already added): {ex}') from ex
        sent += len(annotations)
        print(f'Finished adding {len(annotations)} annotations.')

    print('Finished adding all annotations.')
    return PublishReport(check_run_id=check_run.id, batches=len(batches), annotations=sent)
