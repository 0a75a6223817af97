"""Package entry point for ``python -m edi_envelope``.

WHY: Users run the encoder as ``python -m edi_envelope interchange.xml``
for CLI mode, or ``python -m edi_envelope --api`` to serve the HTTP API.

RULES:
- ``--api`` starts the FastAPI app under uvicorn
- Without ``--api``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--api" in sys.argv:
        from edi_envelope.server.app import run_api
        run_api()
    else:
        from edi_envelope.cli import main
        main()
