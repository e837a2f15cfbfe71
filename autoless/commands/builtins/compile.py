from autoless.commands import register


@register(name='compile', help_args='[FILE]', help_msg='Compile the project of a LESS file')
def compile_project(app, *paths):
    """
    Compile manually, regardless of the projects AUTO_COMPILE setting.

    :type app: autoless.app.App
    :rtype: autoless.app.CompileAttempt
    """
    from autoless.commands import activate_file

    activate_file(app, paths)
    return app.perform(auto=False)
