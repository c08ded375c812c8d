import pytest

from quill.interpreter import Interpreter


@pytest.fixture
def run(capsys):
    """Run a program and return everything it wrote to stdout."""
    def _run(source, **kwargs):
        Interpreter(**kwargs).eval(source)
        return capsys.readouterr().out
    return _run
