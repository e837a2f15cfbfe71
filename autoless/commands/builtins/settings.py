from autoless.commands import register


@register(name='settings', help_args='[NAME [VALUE]]', help_msg='Show or change settings')
def settings(app, *args):
    """
    With no arguments print every setting, with a name print its value, and with a name and value store the value in
    the settings file. Values are read as JSON where possible, so 'true' and '1' become a boolean and a number.

    :type app: autoless.app.App
    """
    import json
    from autoless.commands import CommandError
    from autoless.app.settings import SETTINGS_DEFAULTS

    if len(args) > 2:
        raise CommandError('Expected a setting name and value, got {0} arguments'.format(len(args)))

    if len(args) == 0:
        for name in sorted(app.settings.values):
            print('{0} = {1}'.format(name, json.dumps(app.settings.get(name))))
        return

    name = args[0]
    if name not in app.settings.values:
        raise CommandError('Unknown setting \'{0}\', expected one of: {1}'.format(name,
                                                                                  ', '.join(sorted(SETTINGS_DEFAULTS))))

    if len(args) == 1:
        print(json.dumps(app.settings.get(name)))
        return

    try:
        value = json.loads(args[1])
    except ValueError:
        value = args[1]
    default = SETTINGS_DEFAULTS.get(name)
    if default is not None and type(value) is not type(default):
        raise CommandError('Setting \'{0}\' expects a {1} value'.format(name, type(default).__name__))

    app.settings.set(name, value)
    app.settings.save()
    return value
