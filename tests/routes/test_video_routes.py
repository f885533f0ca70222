import asyncio
import json
from itertools import count

import httpx
import pytest
import respx
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from careflow.auth.dependencies import security
from careflow.auth.jwt_handler import create_access_token
from careflow.core.config import Settings
from careflow.routes import video_routes

ROOMS_URL = 'https://api.daily.co/v1/rooms'


class _FakeRequest:
    def __init__(self, body=None, raw: str | None = None):
        self._body = body
        self._raw = raw

    async def json(self):
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body


def _room_from_request(request: httpx.Request) -> httpx.Response:
    name = json.loads(request.content)['name']
    return httpx.Response(200, json={'name': name, 'url': f'https://careflow.daily.co/{name}'})


def _call(db, settings: Settings, credentials: HTTPAuthorizationCredentials | None, body=None, raw: str | None = None):
    request = _FakeRequest(body={'appointmentId': 'appt-123'} if body is None and raw is None else body, raw=raw)
    return asyncio.run(video_routes.create_video_room(
        request=request,
        credentials=credentials,
        db=db,
        settings=settings,
    ))


def _bearer(user_id: str, settings: Settings) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=create_access_token(user_id, settings))


def test_owner_gets_room_url_for_their_appointment(portal_db, owned_appointment, settings) -> None:
    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        response = _call(portal_db, settings, _bearer('user-a', settings))

    body = json.loads(response.body)
    assert response.status_code == 200
    assert 'appt-123' in body['url']
    assert body['name'].startswith('careflow-appt-123-')
    assert rooms.call_count == 1
    assert response.headers['access-control-allow-origin'] == '*'


def test_room_request_carries_expiry_and_feature_flags(portal_db, owned_appointment, settings, monkeypatch) -> None:
    monkeypatch.setattr('careflow.video.service.current_time_ms', lambda: 1_700_000_000_500)

    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)
        _call(portal_db, settings, _bearer('user-a', settings))

    sent = rooms.calls.last.request
    payload = json.loads(sent.content)
    assert sent.headers['authorization'] == 'Bearer daily-test-key'
    assert payload == {
        'name': 'careflow-appt-123-1700000000500',
        'privacy': 'public',
        'properties': {
            'exp': 1_700_000_000 + 3600,
            'enable_chat': True,
            'enable_screenshare': True,
            'enable_knocking': False,
            'start_video_off': False,
            'start_audio_off': False,
        },
    }


def test_other_user_is_forbidden_and_no_room_is_created(portal_db, owned_appointment, settings) -> None:
    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        response = _call(portal_db, settings, _bearer('user-b', settings))

    assert response.status_code == 403
    assert json.loads(response.body) == {'error': 'Appointment not found or access denied'}
    assert rooms.call_count == 0


def test_unknown_appointment_is_forbidden(portal_db, settings) -> None:
    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        response = _call(portal_db, settings, _bearer('user-a', settings), body={'appointmentId': 'nope'})

    assert response.status_code == 403
    assert rooms.call_count == 0


@pytest.mark.parametrize('credentials', [
    None,
    HTTPAuthorizationCredentials(scheme='Bearer', credentials=''),
    HTTPAuthorizationCredentials(scheme='Bearer', credentials='not-a-jwt'),
])
def test_missing_or_invalid_credentials_are_unauthorized(portal_db, owned_appointment, settings, credentials) -> None:
    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        response = _call(portal_db, settings, credentials)

    assert response.status_code == 401
    assert 'error' in json.loads(response.body)
    assert rooms.call_count == 0


def test_token_signed_with_another_secret_is_unauthorized(portal_db, owned_appointment, settings) -> None:
    forged = create_access_token('user-a', Settings(jwt_secret_key='another-portal-secret-0123456789abcdef'))

    response = _call(portal_db, settings, HTTPAuthorizationCredentials(scheme='Bearer', credentials=forged))

    assert response.status_code == 401


def test_missing_video_key_is_reported_without_room_details(portal_db, owned_appointment) -> None:
    settings = Settings(jwt_secret_key='careflow-test-secret-0123456789abcdef', video_provider_key=None)

    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        response = _call(portal_db, settings, _bearer('user-a', settings))

    assert response.status_code == 500
    assert json.loads(response.body) == {'error': 'Video service not configured'}
    assert rooms.call_count == 0


def test_provider_failure_hides_provider_body(portal_db, owned_appointment, settings) -> None:
    with respx.mock(assert_all_called=False) as respx_mock:
        respx_mock.post(ROOMS_URL).respond(400, text='{"error":"invalid-request-error","info":"secret detail"}')

        response = _call(portal_db, settings, _bearer('user-a', settings))

    assert response.status_code == 500
    assert json.loads(response.body) == {'error': 'Failed to create video room'}


def test_unexpected_exception_becomes_internal_error(portal_db, owned_appointment, settings, monkeypatch) -> None:
    async def explode(*args, **kwargs):
        raise RuntimeError('socket closed')

    monkeypatch.setattr(video_routes, 'provision_room', explode)

    response = _call(portal_db, settings, _bearer('user-a', settings))

    assert response.status_code == 500
    assert json.loads(response.body) == {'error': 'Internal server error'}


def test_malformed_body_is_rejected(portal_db, owned_appointment, settings) -> None:
    response = _call(portal_db, settings, _bearer('user-a', settings), raw='{not json')

    assert response.status_code == 400
    assert json.loads(response.body) == {'error': 'Request body must be JSON'}


def test_repeated_joins_create_distinct_rooms(portal_db, owned_appointment, settings, monkeypatch) -> None:
    clock = count(1_700_000_000_000)
    monkeypatch.setattr('careflow.video.service.current_time_ms', lambda: next(clock))

    with respx.mock(assert_all_called=False) as respx_mock:
        rooms = respx_mock.post(ROOMS_URL).mock(side_effect=_room_from_request)

        first = json.loads(_call(portal_db, settings, _bearer('user-a', settings)).body)
        second = json.loads(_call(portal_db, settings, _bearer('user-a', settings)).body)

    assert first['name'] != second['name']
    assert rooms.call_count == 2


def test_preflight_returns_empty_body_with_cors_headers() -> None:
    response = video_routes.create_video_room_preflight()

    assert response.status_code == 200
    assert response.body == b''
    assert response.headers['access-control-allow-origin'] == '*'


def _request_with_headers(headers: list[tuple[bytes, bytes]]) -> Request:
    return Request({'type': 'http', 'method': 'POST', 'path': '/functions/create-video-room', 'headers': headers})


@pytest.mark.parametrize('headers', [[], [(b'authorization', b'Token abc')], [(b'authorization', b'Bearer')]])
def test_bearer_scheme_yields_no_credentials_for_missing_or_foreign_headers(headers) -> None:
    assert asyncio.run(security(_request_with_headers(headers))) is None


def test_bearer_scheme_extracts_token(settings) -> None:
    token = create_access_token('user-a', settings)

    credentials = asyncio.run(security(_request_with_headers([(b'authorization', f'Bearer {token}'.encode())])))

    assert credentials.scheme == 'Bearer'
    assert credentials.credentials == token
