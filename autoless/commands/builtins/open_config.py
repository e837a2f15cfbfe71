from autoless.commands import register


@register(name='open-config', help_args='[FILE]', help_msg='Open the .lessconfig for the project of a file')
def open_config(app, *paths):
    from autoless.commands import activate_file

    activate_file(app, paths)
    return app.open_config()
