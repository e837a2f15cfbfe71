"""
Workspace
Project roots, open editors and the events they emit. Stands in for a host editors workspace, so compiles can be
triggered by saves without depending on any particular editor.
"""
import os
import logging

log = logging.getLogger(__name__)


class Disposable:
    """
    Subscription token. Disposing it runs its release function once.
    """
    def __init__(self, release=None):
        """
        :type release: callable | None
        """
        self._release = release
        self.disposed = False

    def dispose(self):
        if self.disposed:
            return
        self.disposed = True
        if self._release is not None:
            self._release()


class CompositeDisposable:
    """
    Registry of subscription tokens that can be released together.
    """
    def __init__(self, *disposables):
        self.disposed = False
        self.disposables = []
        """:type: list[Disposable]"""
        self.add(*disposables)

    def add(self, *disposables):
        if self.disposed:
            for disposable in disposables:
                disposable.dispose()
            return
        for disposable in disposables:
            if disposable not in self.disposables:
                self.disposables.append(disposable)

    def remove(self, *disposables):
        """
        Stop tracking tokens, disposing them as they are removed.
        """
        for disposable in disposables:
            if disposable in self.disposables:
                self.disposables.remove(disposable)
                disposable.dispose()

    def dispose(self):
        self.disposed = True
        disposables, self.disposables = self.disposables, []
        for disposable in disposables:
            disposable.dispose()

    def __len__(self):
        return len(self.disposables)

    def __contains__(self, disposable):
        return disposable in self.disposables


class Emitter:
    """
    Named event listener lists.
    """
    def __init__(self):
        self._handlers = {}

    def on(self, name, callback):
        """
        :type name: str
        :type callback: callable
        :rtype: Disposable
        """
        handlers = self._handlers.setdefault(name, [])
        handlers.append(callback)

        def release():
            if callback in handlers:
                handlers.remove(callback)
        return Disposable(release)

    def emit(self, name, *args):
        for callback in list(self._handlers.get(name, [])):
            callback(*args)

    def listener_count(self, name):
        return len(self._handlers.get(name, []))

    def clear(self):
        self._handlers = {}


class Editor:
    """
    An open file.
    """
    def __init__(self, workspace, path):
        """
        :type workspace: Workspace
        :param path: Absolute path of the file being edited.
        :type path: str
        """
        self.workspace = workspace
        self.path = path
        self.destroyed = False
        self.emitter = Emitter()

    def get_path(self):
        return self.path

    def on_did_save(self, callback):
        """
        :param callback: Called with the editor after it is saved.
        :type callback: callable[Editor]
        :rtype: Disposable
        """
        return self.emitter.on('did-save', callback)

    def on_did_destroy(self, callback):
        """
        :param callback: Called with the editor after it is closed.
        :type callback: callable[Editor]
        :rtype: Disposable
        """
        return self.emitter.on('did-destroy', callback)

    def save(self):
        if self.destroyed:
            return
        self.emitter.emit('did-save', self)

    def destroy(self):
        if self.destroyed:
            return
        self.destroyed = True
        self.workspace._remove_editor(self)
        self.emitter.emit('did-destroy', self)
        self.emitter.clear()


def print_opener(path, line=None, column=None):
    """
    Default opener, prints a path:line:column location.
    """
    location = path
    if line is not None:
        location += ':{0}'.format(line + 1)
        if column is not None:
            location += ':{0}'.format(column + 1)
    print(location)


class Workspace:
    """
    Tracked project roots and their open editors.
    """
    def __init__(self, project_roots=None, opener=None):
        """
        :param project_roots: Top level project directories.
        :type project_roots: list[str] | None
        :param opener: Callable used to open a file for viewing, taking the path and optional 0-based line and column.
        :type opener: callable[str, int | None, int | None] | None
        """
        self.project_roots = [os.path.abspath(os.path.expanduser(root)) for root in (project_roots or [])]
        self.opener = opener if opener is not None else print_opener
        self.editors = []
        """:type: list[Editor]"""
        self.active_editor = None
        """:type: Editor | None"""
        self.emitter = Emitter()

    def get_paths(self):
        return list(self.project_roots)

    def get_text_editors(self):
        return list(self.editors)

    def get_active_text_editor(self):
        return self.active_editor

    def get_editor(self, path):
        """
        :type path: str
        :rtype: Editor | None
        """
        path = os.path.abspath(path)
        for editor in self.editors:
            if editor.path == path:
                return editor
        return None

    def on_did_add_text_editor(self, callback):
        """
        :param callback: Called with each newly opened editor.
        :type callback: callable[Editor]
        :rtype: Disposable
        """
        return self.emitter.on('did-add-text-editor', callback)

    def open_editor(self, path, activate=True):
        """
        Open an editor for a file, reusing an already open one.

        :type path: str
        :type activate: bool
        :rtype: Editor
        """
        editor = self.get_editor(path)
        if editor is None:
            editor = Editor(self, os.path.abspath(path))
            self.editors.append(editor)
            log.debug('Opened editor for \'%s\'', editor.path)
            self.emitter.emit('did-add-text-editor', editor)
        if activate:
            self.active_editor = editor
        return editor

    def save(self, path):
        """
        Save a file, opening and activating an editor for it first.

        :type path: str
        :rtype: Editor
        """
        editor = self.open_editor(path)
        editor.save()
        return editor

    def close(self, path):
        """
        Close the editor for a file, if one is open.

        :type path: str
        :rtype: bool
        """
        editor = self.get_editor(path)
        if editor is None:
            return False
        editor.destroy()
        return True

    def open(self, path, line=None, column=None):
        """
        Open a file for viewing.

        :type path: str
        :param line: 0-based line to open at.
        :type line: int | None
        :param column: 0-based column to open at.
        :type column: int | None
        """
        self.opener(path, line, column)

    def _remove_editor(self, editor):
        if editor in self.editors:
            self.editors.remove(editor)
        if self.active_editor is editor:
            self.active_editor = self.editors[-1] if len(self.editors) > 0 else None
        log.debug('Closed editor for \'%s\'', editor.path)
