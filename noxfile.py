"""Installs loggenerator, prints help text, and runs the tests with Python 3.10 - 3.13

Use this file with the `nox` tool to run loggenerator with all specified versions
of Python. For more information, see: https://nox.thea.codes/en/stable/
"""
import nox

PYTHON_VERSIONS = ["3.10", "3.11", "3.12", "3.13"]


@nox.session(python=PYTHON_VERSIONS)
def smoke_test(session):
    session.install(".")
    session.run("loggenerator", "-h")
    session.run("loggenerator", "--count", "100", "--seed", "1", "--no-fatal-exit", "--summary")


@nox.session(python=PYTHON_VERSIONS)
def tests(session):
    session.install(".[test]")
    session.run("pytest", *session.posargs)
