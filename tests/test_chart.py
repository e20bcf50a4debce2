from team_sizing.chart import chart_data, chart_figure, fig_to_png_bytes

from .helpers import add


def test_counts_in_first_seen_order(session):
    add(session, ("Ada", "3"), ("Bo", "3"), ("Cy", "5"))
    assert chart_data(session.estimates) == [
        {"label": "3", "count": 2},
        {"label": "5", "count": 1},
    ]


def test_groups_by_label_not_sorted(session):
    add(session, ("Ada", "13"), ("Bo", "2"), ("Cy", "13"), ("Di", "1"))
    assert [d["label"] for d in session.chart_data()] == ["13", "2", "1"]
    assert [d["count"] for d in session.chart_data()] == [2, 1, 1]


def test_empty_roster():
    assert chart_data([]) == []


def test_figure_renders_png(session):
    add(session, ("Ada", "3"), ("Bo", "5"))
    fig = chart_figure(session.chart_data())
    png = fig_to_png_bytes(fig)
    assert png.startswith(b"\x89PNG")
