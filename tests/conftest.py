import os
import sys
import logging
import shlex
import shutil
import pytest

RESOURCES_ROOT = os.path.join(os.path.dirname(__file__), 'resources')


class Resources:
    """
    Access to the fixture directories under tests/resources.
    """
    def __init__(self, root):
        self.root = root

    def path(self, name):
        return os.path.join(self.root, name)

    def copy(self, name, dest_path):
        shutil.copytree(self.path(name), dest_path, dirs_exist_ok=True)
        return dest_path


class RecordingCompiler:
    """
    Compiler stand-in that records calls and always succeeds.
    """
    def __init__(self):
        self.calls = []

    def compile(self, project_root, config):
        from autoless.compiler import CompileResult

        self.calls.append((project_root, config))
        return CompileResult(True, config.source_file, None, None)


class RecordingOpener:
    def __init__(self):
        self.opened = []

    def __call__(self, path, line=None, column=None):
        self.opened.append((path, line, column))


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Drop handlers installed by configure_logging, so they don't outlive the streams they were bound to.
    """
    yield
    log = logging.getLogger('autoless')
    for handler in list(log.handlers):
        if getattr(handler, 'autoless_handler', False):
            log.removeHandler(handler)
            handler.close()


@pytest.fixture
def resources():
    return Resources(RESOURCES_ROOT)


@pytest.fixture
def temp_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def fake_lessc(resources):
    """
    Compiler command running the fake lessc script with the current interpreter.
    """
    return '{0} {1}'.format(shlex.quote(sys.executable), shlex.quote(resources.path(os.path.join('bin', 'fake_lessc.py'))))


@pytest.fixture
def project(resources, temp_dir):
    return resources.copy('project', os.path.join(temp_dir, 'project'))


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def app(project, opener, fake_lessc):
    from autoless.app import App
    from autoless.app.settings import Settings
    from autoless.workspace import Workspace

    settings = Settings(values={'less-bin': fake_lessc})
    return App(settings=settings, workspace=Workspace([project], opener=opener))


@pytest.fixture
def recording_compiler(app):
    compiler = RecordingCompiler()
    app.compiler = compiler
    return compiler


@pytest.fixture
def write_config(project):
    """
    Replace the project .lessconfig with the given text.
    """
    def write(text):
        with open(os.path.join(project, '.lessconfig'), 'w') as fh:
            fh.write(text)
    return write
