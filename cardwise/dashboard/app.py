"""Plotly Dash application: multi-page layout."""

import sys
from pathlib import Path

# Ensure project root is on sys.path so `cardwise.*` imports work
# even when Dash's reloader spawns a child process.
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from dash import Dash, html, dcc, page_container

app = Dash(
    __name__,
    use_pages=True,
    suppress_callback_exceptions=True,
    title="Cardwise",
)

app.layout = html.Div([
    # Ledger snapshot uploaded on the overview page, kept across navigation
    dcc.Store(id="ledger-store", storage_type="session"),

    # Navigation
    html.Nav([
        html.Div([
            html.H1("Cardwise", style={"fontSize": "1.5rem", "margin": "0"}),
            html.Div([
                dcc.Link("Overview", href="/", style={"marginRight": "1rem"}),
                dcc.Link("Installment Simulator", href="/simulator", style={"marginRight": "1rem"}),
            ]),
        ], style={
            "display": "flex",
            "justifyContent": "space-between",
            "alignItems": "center",
            "maxWidth": "1200px",
            "margin": "0 auto",
            "padding": "0 1rem",
        }),
    ], style={
        "backgroundColor": "#1a1a2e",
        "color": "white",
        "padding": "1rem 0",
        "marginBottom": "2rem",
    }),

    # Page content
    html.Div(
        page_container,
        style={"maxWidth": "1200px", "margin": "0 auto", "padding": "0 1rem"},
    ),
])


if __name__ == "__main__":
    app.run(debug=True, port=8050)
