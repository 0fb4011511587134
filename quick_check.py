import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent
PY_FILES = [
    "palm_app_qt.py",
    "palm/constants.py",
    "palm/paths.py",
    "palm/errors.py",
    "palm/domain/colors.py",
    "palm/domain/helpers.py",
    "palm/domain/models.py",
    "palm/infra/config_store.py",
    "palm/infra/fixtures.py",
    "palm/infra/message_store.py",
    "palm/services/detail_loader.py",
    "palm/services/inbox.py",
    "palm/services/list_sync.py",
    "palm_qt/constants.py",
    "palm_qt/rendering.py",
    "palm_qt/window.py",
    "palm_qt/workers.py",
    "palm_qt/helpers/worker_manager.py",
    "palm_qt/mixins/inbox_list.py",
    "palm_qt/mixins/inbox_ui.py",
    "palm_qt/mixins/window_state.py",
    "scripts/populate_emails.py",
]


def run(cmd):
    print("> " + " ".join(cmd))
    result = subprocess.run(cmd, cwd=ROOT)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


def main():
    run([sys.executable, "-m", "py_compile", *PY_FILES])
    run([sys.executable, "-c", "import palm, palm_qt.window; print('imports ok')"])
    run([sys.executable, "-m", "pytest", "-q"])
    print("All automated checks passed.")


if __name__ == "__main__":
    main()
