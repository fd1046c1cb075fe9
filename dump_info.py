"""
dump-info: write a Jenkins diagnostic snapshot to the job's console log.

Run it as the first step of a job.  The report goes to stdout (the console
log); logs go to stderr.  Sections are toggled with DUMP_NODES, DUMP_TOOLS
and DUMP_PLUGINS; DUMP_INFO_STYLE=legacy selects the older "Found ..." lines.
"""

import logging
import os
import sys

from dotenv import load_dotenv

from dumpinfo.reporter import DumpInfoConfig, run

load_dotenv()


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Imported here: the client refuses to load without Jenkins credentials.
    from dumpinfo import jenkins_api

    run(sys.stdout, DumpInfoConfig.from_env(), jenkins_api.inventory())
    sys.stdout.flush()


if __name__ == "__main__":
    main()
