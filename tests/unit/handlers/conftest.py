import pytest


@pytest.fixture(autouse=True)
def public_base_url(monkeypatch) -> str:
    monkeypatch.setenv('SHORTLINKS_BASE_URL', 'https://sho.rt')
    return 'https://sho.rt'
