# 앱 구성 테스트
# - Settings 값(APP_NAME, HOST, PORT, LOG_LEVEL)이 실제로 앱과 uvicorn 실행에 반영되는지 확인

from unittest.mock import patch

from todo_api.main import create_app, run

from conftest import make_settings


def test_app_title_comes_from_settings():
    app = create_app(make_settings(APP_NAME="Team Todos"))
    assert app.title == "Team Todos"


@patch("todo_api.main.uvicorn.run")
@patch("todo_api.main.get_settings")
def test_run_serves_on_configured_host_and_port(mock_get_settings, mock_uvicorn_run):
    mock_get_settings.return_value = make_settings(HOST="127.0.0.1", PORT=9000, LOG_LEVEL="WARNING")

    run()

    mock_uvicorn_run.assert_called_once_with(
        "todo_api.main:app", host="127.0.0.1", port=9000, log_level="warning"
    )
