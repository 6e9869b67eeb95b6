import json

import click
from config_manager import ConfigManager
from core.session_builder import SessionBuilder


def _selection_params(label, widget_id, widget_type, **extra):
    """Request parameters as the web layer would receive them; unset options are absent"""
    params = {'label': label, 'id': widget_id, 'type': widget_type}
    params.update(extra)
    return {key: value for key, value in params.items() if value is not None}


def _build_session(ctx, dialog=None, **options):
    builder = ctx.obj['BUILDER']
    try:
        session = builder.build(dialog_file=dialog, **options)
    except (ValueError, FileNotFoundError) as e:
        raise click.ClickException(str(e))
    ctx.obj['SESSION'] = session
    if ctx.obj.get('VERBOSE'):
        for key, value in session.config.effective_settings().items():
            session.output.info(f'{key} = {value}')
    return session


selection_options = [
    click.option('-l', '--label', default=None, help='Widget label (shortcut markers are ignored)'),
    click.option('-i', '--id', 'widget_id', default=None, help='Widget id'),
    click.option('-t', '--type', 'widget_type', default=None, help='Widget type, e.g. button, checkbox, tree'),
]


def with_selection(func):
    for option in reversed(selection_options):
        func = option(func)
    return func


@click.group(invoke_without_command=True)
@click.option('-c', '--conf', default=None, help='Path to a custom configuration file')
@click.option('-v', '--verbose', default=False, is_flag=True, help='Show effective settings')
@click.pass_context
def cli(ctx, conf, verbose):
    """
    the main entry point for the CLI click interface
    """
    ctx.ensure_object(dict)  # set up the context object to be passed around

    # Create config manager and session builder
    try:
        config_manager = ConfigManager(conf)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    ctx.obj['CONFIG_MANAGER'] = config_manager
    ctx.obj['BUILDER'] = SessionBuilder(config_manager)
    ctx.obj['VERBOSE'] = verbose

    # if no subcommand was invoked, show the help (since we're using invoke_without_command=True)
    if ctx.invoked_subcommand is None:
        raise click.UsageError(cli.get_help(ctx))


@cli.command()
@click.pass_context
@click.option('-d', '--dialog', default=None, help='JSON dialog description to serve')
@click.option('--host', default=None, help='Host interface to bind (overrides config)')
@click.option('--port', type=int, default=None, help='Port to bind (overrides config)')
def serve(ctx, dialog, host, port):
    """Start the HTTP server for the loaded dialog"""
    session = _build_session(ctx, dialog)
    from web.app import WebApp
    app = WebApp(session)
    bind_host, bind_port = app.bind_address(host, port)
    session.output.info(f'Serving widgets on http://{bind_host}:{bind_port}/v1/widgets')
    app.start(bind_host, bind_port)


@cli.command()
@click.pass_context
@click.option('-d', '--dialog', default=None, help='JSON dialog description to act on')
@with_selection
@click.option('-a', '--action', default=None, help='Action to run: press, check, uncheck, toggle, enter_text, select')
@click.option('--value', default=None, help='Action value (text, item label or item path)')
@click.option('--column', default=None, help='Table column to match the value against')
def act(ctx, dialog, label, widget_id, widget_type, action, value, column):
    """
    run one action request against the loaded dialog
    """
    session = _build_session(ctx, dialog)
    params = _selection_params(label, widget_id, widget_type, action=action, value=value, column=column)
    response = session.handle_request(params)
    print(f'{int(response.status)} {response.status.phrase}')
    print(response.body, end='')
    if not response.ok:
        ctx.exit(1)


@cli.command()
@click.pass_context
@click.option('-d', '--dialog', default=None, help='JSON dialog description to inspect')
@with_selection
def widgets(ctx, dialog, label, widget_id, widget_type):
    """
    list the widgets of the topmost dialog
    """
    from rich.console import Console
    from rich.table import Table

    session = _build_session(ctx, dialog)
    response = session.describe_widgets(_selection_params(label, widget_id, widget_type))
    if not response.ok:
        print(response.body, end='')
        ctx.exit(1)

    table = Table(title=getattr(session.toolkit.topmost_dialog(), 'title', None))
    table.add_column('Class', style='cyan')
    table.add_column('Id')
    table.add_column('Label')
    table.add_column('Details', overflow='fold')
    for props in json.loads(response.body):
        details = {key: value for key, value in props.items() if key not in ('class', 'id', 'label')}
        table.add_row(
            props.get('class', ''),
            props.get('id') or '',
            props.get('label') or '',
            json.dumps(details, ensure_ascii=False) if details else '',
        )
    Console(highlight=False).print(table)


@cli.command()
@click.pass_context
@click.argument('url')
@with_selection
@click.option('-a', '--action', required=True, help='Action to run')
@click.option('--value', default=None, help='Action value')
@click.option('--column', default=None, help='Table column')
@click.option('--timeout', type=float, default=10.0, help='Request timeout in seconds')
def remote(ctx, url, label, widget_id, widget_type, action, value, column, timeout):
    """
    send an action to a running server
    """
    import requests

    params = _selection_params(label, widget_id, widget_type, action=action, value=value, column=column)
    endpoint = url.rstrip('/') + '/v1/widgets'
    try:
        resp = requests.post(endpoint, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise click.ClickException(f'Request to {endpoint} failed: {e}')
    print(f'{resp.status_code} {resp.reason}')
    print(resp.text, end='')
    if resp.status_code != 200:
        ctx.exit(1)


@cli.command()
@click.pass_context
def list_actions(ctx):
    """
    list the available actions and the widget capabilities each one handles
    """
    from toolkit.memory import MemoryToolkit

    session = ctx.obj['BUILDER'].build(toolkit=MemoryToolkit())
    for name, capabilities in session.list_actions().items():
        print(f'{name}: {", ".join(capabilities)}')


# take care of business
if __name__ == "__main__":
    cli(obj={})
