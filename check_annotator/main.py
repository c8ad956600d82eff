# main.py - Orchestrator: find this job's check run and annotate it with the report
import enum
import sys
import time

from check_annotator.batching import MAX_ANNOTATIONS_PER_REQUEST, batch
from check_annotator.config import ActionInputs
from check_annotator.context import TriggerContext
from check_annotator.errors import AnnotatorError
from check_annotator.github_api import get_checks_client
from check_annotator.report import load_report
from check_annotator.reporter import publish_annotations
from check_annotator.resolver import resolve_check_run


class State(enum.Enum):
    INIT = 'init'
    REF_RESOLVED = 'ref_resolved'
    CHECK_RUN_RESOLVED = 'check_run_resolved'
    PUBLISHING = 'publishing'
    DONE = 'done'
    FAILED = 'failed'


def run(inputs, context, environ=None, client_factory=None, sleep=time.sleep):
    """Annotate the current job's check run and return the PublishReport.

    The report is read before the client is built, so a broken report never
    causes API traffic.
    """
    ref = context.commit_ref()
    name_part = inputs.check_run_name_part(environ)
    print(f'[{State.REF_RESOLVED.value}] Using commit {ref} for {context.event_name} event')

    reports = load_report(inputs.report_path)
    client = (client_factory or get_checks_client)(inputs.github_token, context.repository, context.api_url)
    check_run = resolve_check_run(
        client, ref, context.workflow, name_part,
        max_attempts=inputs.max_attempts,
        retry_delay=inputs.retry_delay,
        max_retry_delay=inputs.max_retry_delay,
        sleep=sleep,
    )
    print(f'[{State.CHECK_RUN_RESOLVED.value}] Annotating check run {check_run.name!r} ({check_run.id})')

    result = publish_annotations(client, check_run, batch(MAX_ANNOTATIONS_PER_REQUEST, reports), context.workflow)
    print(f'[{State.DONE.value}] Added {result.annotations} annotation(s) in {result.batches} request(s)')
    return result


def main(environ=None):
    try:
        inputs = ActionInputs.from_env(environ)
        context = TriggerContext.from_env(environ)
        run(inputs, context, environ)
    except AnnotatorError as ex:
        # one line, like core.setFailed: the runner shows it as an error
        message = ' '.join(str(ex).split())
        print(f'[{State.FAILED.value}] {type(ex).__name__}')
        print(f'::error::{message}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
