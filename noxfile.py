# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.
# type: ignore

import shutil
import configparser
from pathlib import Path
import nox


ROOT_DIR = Path(__file__).resolve().parent

CONFIG = configparser.ConfigParser()
CONFIG.read(ROOT_DIR / "setup.cfg")
EXTRAS_REQUIRE = dict(CONFIG["options.extras_require"])
assert EXTRAS_REQUIRE, "Config could not be read correctly"

PYTHONS = ["3.8", "3.9", "3.10", "3.11", "3.12"]
"""The newest supported Python shall be listed last."""

MYPY_VERSION = "1.8.0"

nox.options.error_on_external_run = True


@nox.session(python=False)
def clean(session):
    wildcards = [
        "dist",
        "build",
        "html*",
        ".coverage*",
        ".*cache",
        "*.egg-info",
        "*.log",
        "*.tmp",
        ".nox",
    ]
    for w in wildcards:
        for f in Path.cwd().glob(w):
            session.log(f"Removing: {f}")
            shutil.rmtree(f, ignore_errors=True)


@nox.session(python=PYTHONS, reuse_venv=True)
def test(session):
    session.log("Using the newest supported Python: %s", is_latest_python(session))
    session.install("-e", f".[{','.join(EXTRAS_REQUIRE.keys())}]")

    src_dirs = [
        ROOT_DIR / "blechunk",
        ROOT_DIR / "tests",
    ]
    session.run("coverage", "run", "-m", "pytest", *map(str, src_dirs))

    # Coverage analysis and report.
    fail_under = 0 if session.posargs else 90
    session.run("coverage", "combine")
    session.run("coverage", "report", f"--fail-under={fail_under}")
    if session.interactive:
        session.run("coverage", "html")
        report_file = Path.cwd().resolve() / "htmlcov" / "index.html"
        session.log(f"COVERAGE REPORT: file://{report_file}")

    # Static analysis is run per Python version we support.
    session.install(
        "mypy   == " + MYPY_VERSION,
        "pylint ~= 3.0",
    )
    session.run("mypy", "--strict", "--config-file", str(ROOT_DIR / "setup.cfg"), *map(str, src_dirs))
    session.run("pylint", *map(str, src_dirs))


@nox.session(reuse_venv=True)
def black(session):
    session.install("black ~= 24.1")
    session.run("black", "--check", "--line-length", "120", "blechunk", "tests", "noxfile.py", "setup.py")


def is_latest_python(session) -> bool:
    return PYTHONS[-1] in session.run("python", "-V", silent=True)
