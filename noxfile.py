import shutil

import nox

if shutil.which("uv"):
    nox.options.default_venv_backend = "uv"

nox.options.error_on_external_run = True
nox.options.stop_on_first_error = True

python_versions = ["3.11", "3.12", "3.13"]


@nox.session(python=python_versions)
def tests(session):
    session.install(".[test]")
    session.run("pytest", "-vv", "-m", "not slow")
    # The watcher tests depend on file system events arriving in time; run them
    # separately so a slow CI machine can be told apart from a real failure.
    session.run("pytest", "-vv", "-m", "slow")
    session.run("kicker", success_codes=[1], silent=True)
    session.run("kicker", "--help", silent=True)


@nox.session(python=python_versions)
def examples(session):
    session.install(".")

    with session.chdir("examples/quiet"):
        session.run("kicker", "echo", "hello")
        session.run("kicker", "sh -c 'exit 3'", success_codes=[3])

    with session.chdir("examples/silent"):
        session.run("kicker", "ls", "Kickerfile.toml")
        session.run("kicker", "ls", "no-such-file", success_codes=[1, 2])
