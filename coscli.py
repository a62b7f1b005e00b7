import logging
import sys

import click

from cosclient.client import COSClient
from cosclient.config import load_config
from cosclient.exceptions import ConfigurationError, TransportError
from cosclient.printer import format_output, reply_summary


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--profile', required=True, help='Profile name from .config.yaml')
@click.option('--config', 'config_path', default='.config.yaml',
              help='Path to configuration file')
@click.option('--format', 'outfmt', default='json',
              type=click.Choice(['json', 'yaml', 'table']))
@click.option('--verbose', is_flag=True, help='Log HTTP exchanges')
@click.pass_context
def cli(ctx, profile, config_path, outfmt, verbose):
    """CLI tool for Tencent COS objects."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        conf = load_config(profile, config_path)
        client = COSClient.from_config(conf)
    except ConfigurationError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    ctx.obj = {
        'profile': profile,
        'client': client,
        'outfmt': outfmt,
    }


def _call(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except TransportError as e:
        click.echo(f"Request failed: {e}", err=True)
        sys.exit(1)


@cli.command('put')
@click.argument('key')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--type', 'content_type', help='Content-Type when the extension is unknown')
@click.option('--name', help='File name used to infer the Content-Type')
@click.pass_context
def put_cmd(ctx, key, path, content_type, name):
    """Upload a local file to KEY."""
    options = {'type': content_type, 'name': name}
    with open(path, 'rb') as f:
        reply = _call(ctx.obj['client'].put_object, key, f, options)
    format_output(reply_summary(reply), ctx.obj['outfmt'])


@cli.command('get')
@click.argument('key')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True),
              help='Write the object to this file instead of stdout')
@click.pass_context
def get_cmd(ctx, key, output):
    """Download KEY."""
    reply = _call(ctx.obj['client'].get_object, key)
    if reply.code != 200:
        format_output(reply_summary(reply), ctx.obj['outfmt'])
        sys.exit(1)
    if output:
        with open(output, 'wb') as f:
            f.write(reply.buffer)
        click.echo(f"Saved {key} to {output} ({len(reply.buffer)} bytes)")
    else:
        click.get_binary_stream('stdout').write(reply.buffer)


@cli.command('delete')
@click.argument('key')
@click.pass_context
def delete_cmd(ctx, key):
    """Delete KEY."""
    reply = _call(ctx.obj['client'].delete_object, key)
    format_output(reply_summary(reply), ctx.obj['outfmt'])


@cli.command('head')
@click.argument('key')
@click.pass_context
def head_cmd(ctx, key):
    """Show status and headers of KEY."""
    reply = _call(ctx.obj['client'].head_object, key)
    format_output(reply_summary(reply), ctx.obj['outfmt'])


@cli.command('sign-url')
@click.argument('key')
@click.option('--ttl', default=60, show_default=True, type=int,
              help='Validity in seconds')
@click.pass_context
def sign_url_cmd(ctx, key, ttl):
    """Print a pre-signed GET URL for KEY."""
    click.echo(ctx.obj['client'].get_sign_url(key, ttl))


@cli.command('put-url')
@click.argument('key')
@click.argument('url')
@click.option('--type', 'content_type', help='Content-Type when the extension is unknown')
@click.pass_context
def put_url_cmd(ctx, key, url, content_type):
    """Fetch URL and store it as KEY, then print a signed URL."""
    signed = _call(ctx.obj['client'].put_object_with_url, key, url,
                   {'type': content_type})
    click.echo(signed)


if __name__ == '__main__':
    cli()
