import os
import logging
import logging.handlers
import importlib
from collections import namedtuple
from autoless import commands
from autoless.app.config import CONFIG_FILE_NAME, ConfigStore, ProjectConfig, InvalidConfig, format_list
from autoless.app.paths import resolve_project_path
from autoless.app.settings import Settings
from autoless.compiler import LessCompiler, find_error_reference
from autoless.notifications import Notifier, NotificationButton
from autoless.workspace import Workspace, CompositeDisposable


class AppError(Exception):
    pass


SUCCESS = 'success'
VALIDATION_FAILED = 'validation-failed'
COMPILE_FAILED = 'compile-failed'
SKIPPED = 'skipped'
ABORTED = 'aborted'

CompileAttempt = namedtuple('CompileAttempt', ['outcome', 'auto', 'path', 'config', 'invalid', 'result'])


def _attempt(outcome, auto, path=None, config=None, invalid=None, result=None):
    return CompileAttempt(outcome, auto, path, config, invalid or [], result)


def configure_logging(log_root=None):
    """
    Send autoless log messages to the console, and optionally to a rotating log file. Replaces any handlers added by a
    previous call.

    :param log_root: Directory to write autoless.log to.
    :type log_root: str | None
    :rtype: logging.Logger
    :raises autoless.app.AppError: If the log directory can't be created or written to.
    """
    log = logging.getLogger('autoless')
    log.setLevel(logging.DEBUG)
    for handler in list(log.handlers):
        if getattr(handler, 'autoless_handler', False):
            log.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter('%(asctime)s %(levelname)s: %(message)s')
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    console_handler.autoless_handler = True
    log.addHandler(console_handler)

    if log_root is not None:
        log_root = os.path.abspath(os.path.expanduser(log_root))
        try:
            os.makedirs(log_root, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(os.path.join(log_root, 'autoless.log'),
                                                                encoding='utf-8',
                                                                maxBytes=2 * 1024 * 1024,
                                                                backupCount=2)
        except OSError as e:
            raise AppError('Could not open log file in \'{0}\': {1}'.format(log_root, e))
        file_handler.setFormatter(formatter)
        file_handler.autoless_handler = True
        log.addHandler(file_handler)
    return log


class App:
    def __init__(self, project_roots=None, settings=None, workspace=None, notifier=None):
        """
        Initialize a new App for a set of project roots.

        :param project_roots: Project root directories. Ignored if a workspace is given. If both are None the current
                              working directory is used.
        :type project_roots: list[str] | None
        :param settings: User settings, defaults are used if None.
        :type settings: autoless.app.settings.Settings | None
        :param workspace: Workspace holding the projects and open editors.
        :type workspace: autoless.workspace.Workspace | None
        :param notifier: Notification sink.
        :type notifier: autoless.notifications.Notifier | None
        """
        if workspace is None:
            workspace = Workspace(project_roots if project_roots is not None else [os.getcwd()])

        self.workspace = workspace
        self.settings = settings if settings is not None else Settings()
        self.disposables = None
        """:type: autoless.workspace.CompositeDisposable | None"""
        self.editor_subscriptions = {}
        """:type: dict[autoless.workspace.Editor, list[autoless.workspace.Disposable]]"""
        self.last_attempt = None
        """:type: CompileAttempt | None"""

        self.log = logging.getLogger('autoless')
        self.notifier = notifier if notifier is not None else Notifier(self.log)
        self.config_store = ConfigStore(self.notifier, self.workspace.open)
        self.compiler = LessCompiler(self.settings.get('less-bin') or 'lessc')

        # Import builtin commands
        importlib.import_module('autoless.commands.builtins')
        self.commands = dict(commands.available)
        """:type: dict[str, autoless.commands.Command]"""

    @property
    def is_started(self):
        return self.disposables is not None and not self.disposables.disposed

    def start(self):
        """
        Bind save and close events for all open editors, and any editors opened later.
        """
        if self.is_started:
            return
        self.disposables = CompositeDisposable()
        for editor in self.workspace.get_text_editors():
            self.disposables.add(*self._bind_editor_events(editor))
        self.disposables.add(self.workspace.on_did_add_text_editor(self._on_did_add_text_editor))

    def stop(self):
        """
        Release every event subscription made since start.
        """
        if self.disposables is not None:
            self.disposables.dispose()
        self.editor_subscriptions = {}

    def _on_did_add_text_editor(self, editor):
        self.disposables.add(*self._bind_editor_events(editor))

    def _bind_editor_events(self, editor):
        """
        :type editor: autoless.workspace.Editor
        :return: Subscriptions made for the editor.
        :rtype: list[autoless.workspace.Disposable]
        """
        def on_did_save(_):
            self.perform(auto=True)

        def on_did_destroy(_):
            self.disposables.remove(*self.editor_subscriptions.pop(editor, []))

        subscriptions = [editor.on_did_save(on_did_save), editor.on_did_destroy(on_did_destroy)]
        self.editor_subscriptions[editor] = subscriptions
        return subscriptions

    def get_path(self):
        """
        Get the project path for the active editor, warning if it can't be determined.

        :rtype: autoless.app.paths.ProjectPath | None
        """
        editor = self.workspace.get_active_text_editor()
        path = None
        if editor is not None:
            path = resolve_project_path(editor.get_path(), self.workspace.get_paths())
        if path is None:
            self.notifier.add_warning('Autoless: Unable to determine project!',
                                      detail='At least one file must be active opened to detect the current project.')
        return path

    def perform(self, auto=False):
        """
        Attempt to compile the project of the active editor.

        :param auto: The compile was triggered by a save, rather than run manually.
        :type auto: bool
        :rtype: CompileAttempt
        """
        attempt = self._perform(auto)
        self.last_attempt = attempt
        self.log.debug('Compile attempt finished: %s', attempt.outcome)
        return attempt

    def _perform(self, auto):
        path = self.get_path()
        if path is None:
            return _attempt(ABORTED, auto)

        values = self.config_store.load(path.project)
        if values is None:
            return _attempt(ABORTED, auto, path)

        try:
            config = ProjectConfig.from_mapping(values)
        except InvalidConfig as e:
            self.notifier.add_warning('Autoless: Unable to compile, due to invalid \'{0}\'!'.format(CONFIG_FILE_NAME),
                                      detail='The following properties are invalid:\n{0}'.format(format_list(e.fields)),
                                      dismissable=True)
            return _attempt(VALIDATION_FAILED, auto, path, invalid=e.fields)

        if not path.file.endswith('.less'):
            return _attempt(SKIPPED, auto, path, config)
        if auto and not config.auto_compile:
            return _attempt(SKIPPED, auto, path, config)

        result = self.compiler.compile(path.project, config)
        if result.success:
            self.notifier.add_success('Autoless: Successfully compiled \'{0}\''.format(config.source_file))
            return _attempt(SUCCESS, auto, path, config, result=result)

        buttons = []
        reference = find_error_reference(path.project, result.message)
        if reference is not None:
            buttons.append(NotificationButton('Jump to line', lambda: self.jump_to(reference)))
        self.notifier.add_error('Autoless: Failed to compile \'{0}\'!'.format(config.source_file),
                                detail=result.message,
                                stack=result.stack,
                                dismissable=True,
                                buttons=buttons)
        return _attempt(COMPILE_FAILED, auto, path, config, result=result)

    def jump_to(self, reference):
        """
        Open the file an error references, at the line and column of the error.

        :type reference: autoless.compiler.ErrorReference
        """
        self.workspace.open(reference.path, reference.row, reference.column)

    def create_config(self):
        """
        Create a config file for the active editors project, using the settings as defaults.

        :rtype: bool
        """
        path = self.get_path()
        if path is None:
            return False
        return self.config_store.create(path.project, self.settings.config_defaults())

    def open_config(self):
        """
        Open the config file for the active editors project.

        :rtype: bool
        """
        path = self.get_path()
        if path is None:
            return False
        return self.config_store.open(path.project)

    def run_command(self, name, *args):
        """
        Run a command.

        :param name: Name of the command to run.
        :type name: str
        :param args: Arguments to pass to the command.
        :type args: list(object)
        :return: Return value of the command being run.
        :rtype: object
        :raises autoless.commands.CommandError: If a command with the given name does not exist.
        :raises autoless.commands.CommandError: If the number of arguments passed to the command is not correct.
        """
        if name in self.commands:
            command = self.commands[name]
            args_len = len(args) + 1
            arg_count = command.func.__code__.co_argcount
            has_varg = command.func.__code__.co_flags & 0x04 > 0

            if (has_varg and args_len >= arg_count) or (not has_varg and args_len == arg_count):
                self.log.debug('Running command \'%s\'', ' '.join(map(str, [name] + list(args))))
                return command.func(self, *args)
            else:
                raise commands.CommandError('Incorrect number of arguments passed to command \'{0}\''.format(name))
        raise commands.CommandError('Command \'{0}\' does not exist'.format(name))
