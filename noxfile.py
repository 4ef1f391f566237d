# /// script
# dependencies = ["nox>=2025.02.09"]
# ///

from __future__ import annotations

import difflib
import glob
import shutil

import nox

nox.needs_version = ">=2025.02.09"
nox.options.reuse_existing_virtualenvs = True
nox.options.default_venv_backend = "uv|virtualenv"

PYPROJECT = nox.project.load_toml("pyproject.toml")
PACKAGE_NAME = PYPROJECT["project"]["name"]
PACKAGE_VERSION = PYPROJECT["project"]["version"]


@nox.session(
    python=["3.8", "3.9", "3.10", "3.11", "3.12", "3.13", "pypy3.10"],
    default=False,
)
def tests(session: nox.Session) -> None:
    coverage = ["python", "-m", "coverage"]

    session.install("-e.[test]")

    assert session.python is not None
    assert not isinstance(session.python, bool)
    if "pypy" not in session.python:
        session.run(*coverage, "run", "-m", "pytest", *session.posargs)
        session.run(*coverage, "report")
    else:
        # Don't do coverage tracking for PyPy, since it's SLOW.
        session.run(
            "python",
            "-m",
            "pytest",
            "--capture=no",
            *session.posargs,
        )


@nox.session(python="3.9")
def lint(session: nox.Session) -> None:
    session.install("ruff", "mypy")
    session.run("ruff", "check", "src", "tests", *session.posargs)
    session.run("mypy", "src")

    # Check the distribution
    _build_and_check(session, PACKAGE_VERSION, remove=True)


@nox.session(python="3.9", default=False)
def docs(session: nox.Session) -> None:
    shutil.rmtree("docs/_build", ignore_errors=True)
    session.install("-r", "docs/requirements.txt")
    session.install("-e", ".")

    variants = [
        # (builder, dest)
        ("html", "html"),
        ("doctest", "html"),
    ]

    for builder, dest in variants:
        session.run(
            "sphinx-build",
            "-W",
            "-b",
            builder,
            "-d",
            "docs/_build/doctrees/" + dest,
            "docs",  # source directory
            "docs/_build/" + dest,  # output directory
        )


def _build_and_check(session, release_version, remove=False):
    session.install("build", "twine")

    # `session.run(..., silent=True)` returns None in install-only mode.
    install_only = session.run("python", "--version", silent=True) is None

    # Build the distribution.
    session.run("python", "-m", "build")

    # Check what files are in dist/ for upload.
    files = sorted(glob.glob("dist/*"))
    expected = [
        f"dist/{PACKAGE_NAME}-{release_version}-py3-none-any.whl",
        f"dist/{PACKAGE_NAME}-{release_version}.tar.gz",
    ]
    if files != expected and not install_only:
        diff_generator = difflib.context_diff(
            expected, files, fromfile="expected", tofile="got", lineterm=""
        )
        diff = "\n".join(diff_generator)
        session.error(f"Got the wrong files:\n{diff}")

    # Check distribution files.
    session.run("twine", "check", "--strict", *files)

    # Remove distribution files, if requested.
    if remove and not install_only:
        shutil.rmtree("dist", ignore_errors=True)


if __name__ == "__main__":
    nox.main()
