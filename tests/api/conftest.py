import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(tmp_path, monkeypatch):
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """
log_file = "logs/dockyard.log"

[api]
base_url = "https://gateway.example.com"

[web]
host = "0.0.0.0"
port = 5000
""",
        encoding="utf-8",
    )

    monkeypatch.setenv("DOCKYARD_CONFIG_FILE", str(config_file))

    from dockyard.api import create_app

    app = create_app()
    with TestClient(app) as client:
        yield client
