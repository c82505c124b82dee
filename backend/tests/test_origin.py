import pytest

from scoreboard.errors import ConfigurationError
from scoreboard.services.origin import (
    allowlist_admits,
    cors_origins,
    domain_admits,
    is_request_admitted,
)

ALLOWED = ['https://kireitours.asia', 'capacitor://localhost', 'http://localhost:3000']


@pytest.mark.parametrize('origin,admitted', [
    (None, True),
    ('', True),
    ('https://kireitours.asia', True),
    ('capacitor://localhost', True),
    ('https://games.kireitours.asia', True),
    ('https://kireitours.asia.evil.com', False),
    ('https://evilkireitours.asia', False),
    ('http://localhost:4000', False),
])
def test_allowlist_policy(origin, admitted):
    assert allowlist_admits(origin, ALLOWED, 'kireitours.asia') is admitted


def test_allowlist_without_suffix_only_matches_exact():
    assert not allowlist_admits('https://games.kireitours.asia', ALLOWED, '')


@pytest.mark.parametrize('origin,referer,admitted', [
    ('https://example.com', None, True),
    ('https://play.example.com', None, True),
    ('https://evil.com', None, False),
    ('https://notexample.com', None, False),
    (None, 'https://example.com/game?level=2', True),
    (None, 'https://evil.com/example.com', False),
    (None, None, False),
    ('https://evil.com', 'https://example.com/', False),
])
def test_domain_policy(origin, referer, admitted):
    assert domain_admits(origin, referer, 'example.com') is admitted


def test_open_policy_admits_anything():
    assert is_request_admitted({'ORIGIN_POLICY': 'open'}, 'https://evil.com', None)


def test_unknown_policy_is_configuration_error():
    with pytest.raises(ConfigurationError):
        is_request_admitted({'ORIGIN_POLICY': 'strict'}, None, None)


def test_domain_filter_rejects_before_verification(make_app, fake_verifier):
    app = make_app(ORIGIN_POLICY='domain', ALLOWED_DOMAIN='example.com')
    fake = fake_verifier
    fake.add('token-u1', 'u1', name='Ada')
    app.extensions['identity_verifier'] = fake

    res = app.test_client().post(
        '/api/sync-score',
        json={'token': 'token-u1', 'currentScore': 10},
        headers={'Origin': 'https://evil.com'},
    )
    assert res.status_code == 403
    assert res.get_json() == {'error': 'Forbidden: origin not allowed'}
    assert fake.calls == []


def test_domain_filter_admits_subdomain(make_app):
    app = make_app(ORIGIN_POLICY='domain', ALLOWED_DOMAIN='example.com')
    res = app.test_client().get('/api/leaderboard', headers={'Origin': 'https://www.example.com'})
    assert res.status_code == 200
    assert res.headers.get('Access-Control-Allow-Origin') == 'https://www.example.com'


def test_allowlist_filter_over_http(make_app):
    app = make_app(
        ORIGIN_POLICY='allowlist',
        ALLOWED_ORIGINS=['https://kireitours.asia'],
        ALLOWED_ORIGIN_SUFFIX='kireitours.asia',
    )
    client = app.test_client()
    assert client.get('/api/leaderboard').status_code == 200
    assert client.get('/api/leaderboard', headers={'Origin': 'https://m.kireitours.asia'}).status_code == 200
    assert client.get('/api/leaderboard', headers={'Origin': 'https://evil.com'}).status_code == 403


def test_liveness_is_not_filtered(make_app):
    app = make_app(ORIGIN_POLICY='domain', ALLOWED_DOMAIN='example.com')
    res = app.test_client().get('/', headers={'Origin': 'https://evil.com'})
    assert res.status_code == 200


def test_cors_origins_follow_policy():
    assert cors_origins({'ORIGIN_POLICY': 'open'}) == '*'
    origins = cors_origins({
        'ORIGIN_POLICY': 'allowlist',
        'ALLOWED_ORIGINS': ['https://kireitours.asia'],
        'ALLOWED_ORIGIN_SUFFIX': 'kireitours.asia',
    })
    assert origins[0] == 'https://kireitours.asia'
    assert len(origins) == 2
    assert cors_origins({'ORIGIN_POLICY': 'domain', 'ALLOWED_DOMAIN': ''}) == []
