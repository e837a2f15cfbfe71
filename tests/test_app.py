import os
import pytest


def _less_path(project):
    return os.path.join(project, 'less', 'style.less')


def _messages(app):
    return [(n.level, n.message) for n in app.notifier.notifications]


def test_compile_success(app, project):
    from autoless.app import SUCCESS

    app.workspace.open_editor(_less_path(project))
    attempt = app.perform()

    assert attempt.outcome == SUCCESS
    assert attempt.path.project == project
    assert attempt.path.file == 'less/style.less'
    assert os.path.isfile(os.path.join(project, 'css', 'style.css'))
    assert _messages(app) == [('success', 'Autoless: Successfully compiled \'less/style.less\'')]


def test_compile_failure_offers_jump_to_error(app, project, opener):
    from autoless.app import COMPILE_FAILED

    with open(_less_path(project), 'w') as fh:
        fh.write('body {\n  broken\n}\n')

    app.workspace.open_editor(_less_path(project))
    attempt = app.perform()

    assert attempt.outcome == COMPILE_FAILED
    assert len(app.notifier.notifications) == 1
    notification = app.notifier.notifications[0]
    assert notification.level == 'error'
    assert notification.message == 'Autoless: Failed to compile \'less/style.less\'!'
    assert notification.dismissable
    assert 'on line 2, column 5:' in notification.detail
    assert notification.stack
    assert [button.text for button in notification.buttons] == ['Jump to line']

    notification.buttons[0].on_click()
    assert opener.opened == [(_less_path(project), 1, 4)]


def test_compile_failure_without_reference(app, project, write_config):
    from autoless.app import COMPILE_FAILED

    write_config('MINIFY=false\nAUTO_COMPILE=true\nSOURCE_FILE=less/missing.less\nTARGET_FILE=css/style.css')
    app.workspace.open_editor(_less_path(project))
    attempt = app.perform()

    assert attempt.outcome == COMPILE_FAILED
    assert app.notifier.notifications[0].buttons == []


def test_no_active_editor(app, recording_compiler):
    from autoless.app import ABORTED

    attempt = app.perform()

    assert attempt.outcome == ABORTED
    assert recording_compiler.calls == []
    assert _messages(app) == [('warning', 'Autoless: Unable to determine project!')]
    assert app.notifier.notifications[0].detail == \
        'At least one file must be active opened to detect the current project.'


def test_file_outside_projects(app, temp_dir, recording_compiler):
    from autoless.app import ABORTED

    app.workspace.open_editor(os.path.join(temp_dir, 'elsewhere', 'style.less'))
    attempt = app.perform()

    assert attempt.outcome == ABORTED
    assert recording_compiler.calls == []
    assert _messages(app) == [('warning', 'Autoless: Unable to determine project!')]


def test_missing_config_aborts_silently(app, project, recording_compiler):
    from autoless.app import ABORTED

    os.remove(os.path.join(project, '.lessconfig'))
    app.workspace.open_editor(_less_path(project))
    attempt = app.perform()

    assert attempt.outcome == ABORTED
    assert recording_compiler.calls == []
    assert app.notifier.notifications == []


def test_invalid_config(app, project, write_config, recording_compiler):
    from autoless.app import VALIDATION_FAILED

    write_config('MINIFY=yes\nAUTO_COMPILE=true\nSOURCE_FILE=less/style.less\nTARGET_FILE=12')
    app.workspace.open_editor(_less_path(project))
    attempt = app.perform()

    assert attempt.outcome == VALIDATION_FAILED
    assert attempt.invalid == ['MINIFY', 'TARGET_FILE']
    assert recording_compiler.calls == []
    assert _messages(app) == [('warning', 'Autoless: Unable to compile, due to invalid \'.lessconfig\'!')]
    assert app.notifier.notifications[0].detail == \
        'The following properties are invalid:\n   - MINIFY\n   - TARGET_FILE\n'


@pytest.mark.parametrize('auto', [True, False])
def test_non_less_file_is_skipped(app, project, recording_compiler, auto):
    from autoless.app import SKIPPED

    app.workspace.open_editor(os.path.join(project, 'index.html'))
    attempt = app.perform(auto=auto)

    assert attempt.outcome == SKIPPED
    assert recording_compiler.calls == []
    assert app.notifier.notifications == []


def test_save_with_auto_compile_disabled(app, project, write_config, recording_compiler):
    from autoless.app import SKIPPED

    write_config('MINIFY=false\nAUTO_COMPILE=false\nSOURCE_FILE=less/style.less\nTARGET_FILE=css/style.css')
    app.start()
    app.workspace.save(_less_path(project))

    assert app.last_attempt.outcome == SKIPPED
    assert app.last_attempt.auto
    assert recording_compiler.calls == []
    assert app.notifier.notifications == []


def test_manual_compile_ignores_auto_compile(app, project, write_config, recording_compiler):
    from autoless.app import SUCCESS

    write_config('MINIFY=true\nAUTO_COMPILE=false\nSOURCE_FILE=less/style.less\nTARGET_FILE=css/style.css')
    app.workspace.open_editor(_less_path(project))
    attempt = app.perform(auto=False)

    assert attempt.outcome == SUCCESS
    assert len(recording_compiler.calls) == 1
    root, config = recording_compiler.calls[0]
    assert root == project
    assert config.minify is True


def test_config_is_reread_for_every_attempt(app, project, write_config, recording_compiler):
    from autoless.app import SKIPPED, SUCCESS

    app.start()
    app.workspace.save(_less_path(project))
    assert app.last_attempt.outcome == SUCCESS

    write_config('MINIFY=false\nAUTO_COMPILE=false\nSOURCE_FILE=less/style.less\nTARGET_FILE=css/style.css')
    app.workspace.save(_less_path(project))
    assert app.last_attempt.outcome == SKIPPED
    assert len(recording_compiler.calls) == 1


def test_start_binds_open_and_new_editors(app, project, recording_compiler):
    existing = app.workspace.open_editor(_less_path(project))
    app.start()
    added = app.workspace.open_editor(os.path.join(project, 'less', 'other.less'))

    assert set(app.editor_subscriptions) == {existing, added}
    assert len(app.disposables) == 5

    existing.save()
    assert len(recording_compiler.calls) == 1


def test_destroyed_editor_is_unbound(app, project, recording_compiler):
    app.start()
    editor = app.workspace.open_editor(_less_path(project))
    subscriptions = app.editor_subscriptions[editor]

    editor.destroy()

    assert editor not in app.editor_subscriptions
    assert all(subscription.disposed for subscription in subscriptions)
    assert all(subscription not in app.disposables for subscription in subscriptions)
    assert editor.emitter.listener_count('did-save') == 0
    assert app.workspace.get_text_editors() == []

    editor.save()
    assert recording_compiler.calls == []


def test_stop_releases_all_listeners(app, project, recording_compiler):
    app.start()
    editor = app.workspace.open_editor(_less_path(project))
    app.stop()

    assert len(app.disposables) == 0
    assert editor.emitter.listener_count('did-save') == 0
    assert app.workspace.emitter.listener_count('did-add-text-editor') == 0

    editor.save()
    app.workspace.open_editor(os.path.join(project, 'less', 'other.less')).save()
    assert recording_compiler.calls == []


def test_create_config_uses_settings(app, project):
    os.remove(os.path.join(project, '.lessconfig'))
    app.settings.set('minify', True)
    app.settings.set('source-file', 'styles/main.less')
    app.workspace.open_editor(_less_path(project))

    assert app.create_config()

    assert app.config_store.load(project) == {'minify': True,
                                              'auto_compile': True,
                                              'source_file': 'styles/main.less',
                                              'target_file': 'css/style.css'}


def test_create_config_existing(app, project, opener):
    app.workspace.open_editor(_less_path(project))

    assert not app.create_config()
    assert _messages(app) == [('warning', 'Autoless: A \'.lessconfig\' already exists for this project!')]
    assert opener.opened == [(os.path.join(project, '.lessconfig'), None, None)]


def test_open_config(app, project, opener):
    assert not app.open_config()
    assert opener.opened == []

    app.workspace.open_editor(_less_path(project))
    assert app.open_config()
    assert opener.opened == [(os.path.join(project, '.lessconfig'), None, None)]
