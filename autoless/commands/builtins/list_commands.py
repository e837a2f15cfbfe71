from autoless.commands import register


@register(name='commands', help_msg='List available commands')
def list_commands(app):
    """
    Print each command with its arguments and a short description.

    :type app: autoless.app.App
    """
    usages = dict((name, ' '.join(filter(None, [name, command.help_args]))) for name, command in app.commands.items())
    width = max(14, max(len(usage) for usage in usages.values())) + 2

    for name in sorted(app.commands):
        print('  {0}{1}'.format(usages[name].ljust(width), app.commands[name].help_msg))
