import logging
import sys

import click
import requests

from sharedkey.client import StorageClient
from sharedkey.config import DEFAULT_CONFIG_FILE, build_authenticator, load_config
from sharedkey.exceptions import SharedKeyError
from sharedkey.printer import format_output


def _parse_queries(values):
    query = {}
    for item in values:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{item}'", param_hint='--query')
        query.setdefault(key, []).append(value)
    return query


def _parse_headers(values):
    headers = {}
    for item in values:
        name, sep, value = item.partition(':')
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got '{item}'", param_hint='--header')
        headers[name.strip()] = value.strip()
    return headers


def _request_options(f):
    f = click.option('--data-file', type=click.File('rb'), help='Read the request body from a file')(f)
    f = click.option('--data', 'data', default=None, help='Request body')(f)
    f = click.option('-H', '--header', 'header_list', multiple=True, help="Header as 'Name: value'")(f)
    f = click.option('-q', '--query', 'query_list', multiple=True, help='Query parameter as key=value')(f)
    f = click.argument('path', default='/')(f)
    f = click.argument('method')(f)
    return f


def _body(data, data_file):
    if data_file is not None:
        return data_file.read()
    if data is not None:
        return data.encode('utf-8')
    return b''


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--profile', required=True, help='Profile name from .config.yaml')
@click.option('--config', 'config_path', default=DEFAULT_CONFIG_FILE,
              help='Path to configuration file')
@click.option('--format', 'outfmt', default='json', type=click.Choice(['json', 'yaml']))
@click.option('--debug', is_flag=True, help='Log the string to sign of every request')
@click.pass_context
def cli(ctx, profile, config_path, outfmt, debug):
    """Sign and send storage requests with an account shared key."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    try:
        conf = load_config(profile, config_path)
        auth = build_authenticator(conf, log_string_to_sign=debug)
    except SharedKeyError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    ctx.obj = {
        'profile': profile,
        'conf': conf,
        'auth': auth,
        'client': ctx.with_resource(StorageClient(auth)),
        'outfmt': outfmt,
    }


@cli.command('sign')
@_request_options
@click.pass_context
def sign_cmd(ctx, method, path, query_list, header_list, data, data_file):
    """Print the signed headers and URL for a request without sending it."""
    auth = ctx.obj['auth']
    headers, url = auth.sign(
        method, path,
        query=_parse_queries(query_list),
        headers=_parse_headers(header_list),
        payload=_body(data, data_file),
    )
    format_output({'url': url, 'headers': headers}, ctx.obj['outfmt'])


@cli.command('request')
@_request_options
@click.pass_context
def request_cmd(ctx, method, path, query_list, header_list, data, data_file):
    """Sign a request, send it and print the response."""
    client = ctx.obj['client']
    try:
        resp = client.request(
            method, path,
            query=_parse_queries(query_list),
            headers=_parse_headers(header_list),
            data=_body(data, data_file) or None,
        )
    except requests.RequestException as e:
        click.echo(f"Request failed: {e}", err=True)
        sys.exit(1)

    format_output({
        'status_code': resp.status_code,
        'headers': dict(resp.headers),
        'body': resp.text,
    }, ctx.obj['outfmt'])


if __name__ == '__main__':
    cli()
