"""Tests for the Gitea client."""

from unittest.mock import MagicMock

import pytest
import requests

from mirror import DestinationRepository, DestinationUser, MirrorRequest
from mirror.config import Config
from mirror.tea import Client, create_client

HOST = 'https://gitea.example.com'


def response(status_code=200, json=None):
    r = MagicMock()
    r.status_code = status_code
    r.json.return_value = json
    if status_code >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return r


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return Client(HOST, 'abc123', session)


def test_client_sets_auth_headers(session, client):
    assert session.headers == {
        'Authorization': 'token abc123',
        'Content-Type': 'application/json',
    }


def test_create_client_from_config():
    c = create_client(Config('https://gitea.example.com', 'tok', 'bob', 'alice'))
    assert c._session.headers['Authorization'] == 'token tok'


def test_list_repositories(session, client):
    session.get.return_value = response(json=[
        {'id': 1, 'name': 'a', 'description': 'A', 'mirror': True, 'private': True},
        {'id': 2, 'name': 'b', 'description': None, 'mirror': False},
    ])

    result = client.list_repositories('bob')

    session.get.assert_called_once_with(f'{HOST}/api/v1/users/bob/repos')
    assert result.ok
    assert result.value == [DestinationRepository(1, 'a', 'A', True),
                            DestinationRepository(2, 'b', '', False)]


def test_list_repositories_http_error(session, client):
    session.get.return_value = response(404)

    result = client.list_repositories('bob')

    assert not result.ok
    assert result.value == []
    assert "404" in result.error


def test_list_repositories_transport_error(session, client):
    session.get.side_effect = requests.ConnectionError("connection refused")

    result = client.list_repositories('bob')

    assert not result.ok
    assert result.value == []


def test_list_repositories_decode_error(session, client):
    r = response()
    r.json.side_effect = ValueError("Expecting value")
    session.get.return_value = r

    result = client.list_repositories('bob')

    assert not result.ok
    assert result.value == []


def test_list_repositories_unexpected_shape(session, client):
    session.get.return_value = response(json={'message': 'not a list'})
    assert client.list_repositories('bob').value == []


def test_list_repositories_invalid_username(session, client):
    result = client.list_repositories('')

    session.get.assert_not_called()
    assert not result.ok
    assert result.value == []


def test_get_user(session, client):
    session.get.return_value = response(json={'id': 42, 'login': 'bob'})

    result = client.get_user('bob')

    session.get.assert_called_once_with(f'{HOST}/api/v1/users/bob')
    assert result.ok
    assert result.value == DestinationUser(42)


def test_get_user_not_found(session, client):
    session.get.return_value = response(404)

    result = client.get_user('nobody')

    assert not result.ok
    assert result.value == DestinationUser(0)


def test_create_mirror(session, client):
    session.post.return_value = response(201)
    request = MirrorRequest(name='a', description='A', clone_addr='https://github.com/alice/a.git',
                            repo_name='a', uid=42)

    assert client.create_mirror(request)
    session.post.assert_called_once_with(f'{HOST}/api/v1/repos/migrate',
                                         json=request.as_json())


@pytest.mark.parametrize('status_code', [200, 409, 422, 500])
def test_create_mirror_requires_created(session, client, status_code):
    session.post.return_value = response(status_code)
    request = MirrorRequest('a', '', 'https://github.com/alice/a.git', 'a', 42)
    assert not client.create_mirror(request)


def test_create_mirror_transport_error(session, client, capsys):
    session.post.side_effect = requests.Timeout("timed out")
    request = MirrorRequest('a', '', 'https://github.com/alice/a.git', 'a', 42)

    assert not client.create_mirror(request)
    assert "ERROR: Failed to create mirror a" in capsys.readouterr().out


def test_trigger_sync(session, client):
    session.post.return_value = response(200)

    assert client.trigger_sync('bob', 'a')
    session.post.assert_called_once_with(f'{HOST}/api/v1/repos/bob/a/mirror-sync')


@pytest.mark.parametrize('status_code', [201, 403, 404])
def test_trigger_sync_requires_ok(session, client, status_code):
    session.post.return_value = response(status_code)
    assert not client.trigger_sync('bob', 'a')


def test_trigger_sync_transport_error(session, client):
    session.post.side_effect = requests.ConnectionError("reset")
    assert not client.trigger_sync('bob', 'a')


def test_trigger_sync_invalid_name(session, client):
    assert not client.trigger_sync('bob', '..')
    session.post.assert_not_called()
