from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP = str(Path(__file__).resolve().parents[1] / "TeamSizing.py")


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    at = AppTest.from_file(APP, default_timeout=30)
    at.run()
    return at


def test_renders_empty_round(app):
    assert not app.exception
    assert "(0/10 members)" in app.title[0].value
    assert app.button(key="reveal").disabled


def test_start_without_topic_warns(app):
    app.button(key="start_timer").click().run()
    assert not app.exception
    assert app.warning[0].value == "Please enter a topic for the sizing round"
    assert not app.session_state["sizing"].timer.active


def test_add_and_reveal(app):
    app.text_input(key="name_input").input("Ada")
    app.button(key="size_5").click().run()
    app.button(key="submit").click().run()
    assert not app.exception

    session = app.session_state["sizing"]
    assert session.member_count == 1
    assert session.estimates[0].size_value == 5
    assert "(1/10 members)" in app.title[0].value

    app.button(key="reveal").click().run()
    assert not app.exception
    assert app.session_state["sizing"].revealed


def _add_and_reveal(app):
    app.text_input(key="name_input").input("Ada")
    app.button(key="size_5").click().run()
    app.button(key="submit").click().run()
    app.button(key="reveal").click().run()


def test_reruns_without_download_log_no_exports(app, package_log):
    _add_and_reveal(app)
    package_log.clear()
    for _ in range(3):
        app.run()
    assert not app.exception
    assert not [r for r in package_log.records if "Exported" in r.getMessage()]


def test_countdown_expiry_reveals_on_page(app):
    app.text_input(key="topic_input").input("Login").run()
    app.selectbox(key="duration_input").select(60).run()
    app.button(key="start_timer").click().run()
    session = app.session_state["sizing"]
    assert session.timer.active

    # pretend the countdown fragment has been idle for just over a minute
    session.timer._last_tick -= 61
    app.run()

    assert not app.exception
    session = app.session_state["sizing"]
    assert session.revealed
    assert not session.timer.active
    assert session.timer.remaining == 0
