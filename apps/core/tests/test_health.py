import pytest
from django.urls import reverse


@pytest.mark.django_db
def test_health_check_needs_no_auth(client):
    response = client.get(reverse('health-check'))

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}


@pytest.mark.django_db
def test_unknown_route_returns_json(client):
    response = client.get('/api/does-not-exist/')

    assert response.status_code == 404
    assert response.json()['error'] == 'Not found'
