# main.py - entry point used by action.yml: annotate this job's check run from a JSON report
import sys

from check_annotator.main import main

if __name__ == '__main__':
    sys.exit(main())
