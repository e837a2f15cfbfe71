from autoless.commands import register


@register(help_args='[poll] [event delay [file changed timeout]]', help_msg='Compile whenever a LESS file is saved')
def watch(app, *args):
    """
    Observe the project roots, treating every written LESS file as an editor save and every deleted file as a closed
    editor. Runs until interrupted. Passing 'poll' polls the file system instead of using native file events.

    :type app: autoless.app.App
    """
    from autoless.commands import CommandError
    from autoless.observer import Observer

    polling = len(args) > 0 and args[0] == 'poll'
    if polling:
        args = args[1:]
    if len(args) > 2:
        raise CommandError('Expected at most two timeouts, got {0} arguments'.format(len(args)))
    try:
        timeouts = [max(float(arg), 0.1) for arg in args]
    except ValueError:
        raise CommandError('Timeouts must be numbers of seconds')

    obs = Observer(app.workspace.get_paths(), polling=polling)
    if len(timeouts) >= 1:
        obs.event_timeout = timeouts[0]
    if len(timeouts) >= 2:
        obs.changed_timeout = timeouts[1]

    def on_changed(path):
        if path.endswith('.less'):
            app.workspace.save(path)

    def on_deleted(path):
        app.workspace.close(path)

    obs.on_changed = on_changed
    obs.on_deleted = on_deleted

    app.log.info('Starting %s observer (%ss event delay, %ss file changed timeout)',
                 obs.observer, obs.event_timeout, obs.changed_timeout)
    app.start()
    try:
        obs.start()
    except KeyboardInterrupt:
        pass
    finally:
        obs.stop()
        app.stop()
