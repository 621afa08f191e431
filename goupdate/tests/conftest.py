import json
import os

import pytest
import requests

from goupdate.config import UpdaterConfig
from goupdate.errors import ProcessExecutionError

CATALOG_URL = 'https://catalog.test/dl/?mode=json'
DOWNLOAD_BASE = 'https://catalog.test/dl'


class FakeResponse(object):
    def __init__(self, body=None, status_code=200, chunks=None, fail_after=None):
        self.body = body
        self.status_code = status_code
        self.chunks = chunks or []
        self.fail_after = fail_after
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Client Error', response=self)

    def json(self):
        return json.loads(self.body)

    def iter_content(self, chunk_size=1):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise requests.exceptions.ConnectionError('connection reset')
            yield chunk

    def close(self):
        self.closed = True


class FakeSession(object):
    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requested = []

    def get(self, url, **kwargs):
        self.requested.append(url)
        result = self.routes.get(url)
        if result is None:
            raise requests.exceptions.ConnectionError(f'no route to {url}')
        if isinstance(result, Exception):
            raise result
        return result


class RecordingRunner(object):
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def run(self, command, args):
        self.calls.append((command, list(args)))
        if command in self.fail_on:
            raise ProcessExecutionError(command, args, 1, f'{command}: simulated failure')
        return ''

    @property
    def commands(self):
        return [c for c, _ in self.calls]


class ScriptedPrompt(object):
    def __init__(self, answers):
        self.answers = list(answers)
        self.messages = []

    def prompt_line(self, message):
        self.messages.append(message)
        if not self.answers:
            raise EOFError('input closed')
        return self.answers.pop(0)


def catalog_body(*entries):
    return json.dumps([{'version': v, 'stable': s, 'files': []} for v, s in entries])


@pytest.fixture
def config(tmp_path):
    install_root = tmp_path / 'local' / 'go'
    return UpdaterConfig(
        catalog_url=CATALOG_URL,
        download_base=DOWNLOAD_BASE,
        platform='linux-amd64',
        install_root=str(install_root),
        backup_dir=str(tmp_path / 'local' / 'go-bak'),
        scratch_file=str(tmp_path / 'go.tar.gz'),
    )


@pytest.fixture
def installed(config):
    """A live installation of go1.20.1 at config.install_root"""
    os.makedirs(config.install_root)
    with open(os.path.join(config.install_root, 'VERSION'), 'w') as f:
        f.write('go1.20.1\ntime 2023-02-14T01:32:44Z\n')
    return config.install_root


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def recording_runner():
    return RecordingRunner


@pytest.fixture
def scripted_prompt():
    return ScriptedPrompt


@pytest.fixture
def make_catalog():
    return catalog_body
