import json

import click
import yaml
from tabulate import tabulate


def _rows(data: dict, parent: str = ''):
    for k, v in data.items():
        name = f"{parent}{k}"
        if isinstance(v, dict):
            yield from _rows(v, name + '.')
        else:
            yield name, v


def format_output(data, fmt):
    if fmt == 'json':
        click.echo(json.dumps(data, indent=2))
    elif fmt == 'yaml':
        click.echo(yaml.safe_dump(data, sort_keys=False))
    elif fmt == 'table':
        if isinstance(data, dict):
            click.echo(tabulate(list(_rows(data)), headers=['field', 'value']))
        else:
            click.echo(str(data))
    else:
        click.echo(data)


def reply_summary(reply) -> dict:
    return {'code': reply.code, 'headers': dict(reply.headers)}
