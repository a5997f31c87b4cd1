"""Nox sessions for fontmagician."""

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT, max_version="3.14")
DEV_GROUP = nox.project.dependency_groups(PYPROJECT, "dev")
nox.options.default_venv_backend = "uv"
nox.options.sessions = ["tests"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the suite on every interpreter listed in the classifiers."""
    session.install(".", *DEV_GROUP)
    session.run("pytest", *session.posargs)


@nox.session(python="3.14")
def coverage(session: nox.Session) -> None:
    session.install(".", *DEV_GROUP)
    session.run(
        "pytest",
        "--cov=fontmagician",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python="3.14")
def smoke(session: nox.Session) -> None:
    """Install the wheel and list the packaged catalogs through the console script."""
    session.install(".")
    session.run("fontmagician", "families", "--foundry", "bootstrap")
