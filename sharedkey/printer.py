import json

import click
import yaml


def format_output(data, fmt):
    if fmt == 'json':
        click.echo(json.dumps(data, indent=2))
    elif fmt == 'yaml':
        click.echo(yaml.safe_dump(data, sort_keys=False))
    else:
        raise ValueError(f"Unsupported output format: {fmt}")
