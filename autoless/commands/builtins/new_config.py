from autoless.commands import register


@register(name='new-config', help_args='[FILE]', help_msg='Create a .lessconfig for the project of a file')
def new_config(app, *paths):
    from autoless.commands import activate_file

    activate_file(app, paths)
    return app.create_config()
