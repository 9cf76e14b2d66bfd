"""Plotly visualisation helpers for savings pools.

Each function takes the DataFrame produced by the matching calculator
(:func:`poolup_engine.scheduler.projection_frame`,
:meth:`poolup_engine.budget.BudgetSummary.to_frame`,
:meth:`poolup_engine.achievements.AchievementEngine.status_frame`) and
returns a ``plotly.graph_objects.Figure``.  Money columns arrive in cents
and are plotted in major currency units.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import CENTS_PER_UNIT


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_projection_chart(
    projection: pd.DataFrame, goal_amount: int | None = None, title: str | None = None
) -> go.Figure:
    """Line chart of the projected pool balance month by month.

    Parameters
    ----------
    projection : pandas.DataFrame
        Output of ``projection_frame`` with ``Month`` and ``Cumulative Saved``.
    goal_amount : int, optional
        Goal in cents; drawn as a horizontal reference line.
    title : str, optional
        Chart title.
    """
    if projection.empty:
        return _empty_figure("Pick a target date to see your savings plan")
    df = projection.assign(Saved=projection['Cumulative Saved'] / CENTS_PER_UNIT)
    fig = px.line(df, x='Month', y='Saved', markers=True)
    if goal_amount is not None:
        fig.add_hline(y=goal_amount / CENTS_PER_UNIT, line_dash='dash', annotation_text='Goal')
    fig.update_layout(
        title=title or "Projected savings",
        xaxis_title="Month",
        yaxis_title="Saved",
    )
    return fig


def create_budget_breakdown_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Pie chart of a template's budget lines; zero lines are left out."""
    if breakdown.empty or not (breakdown['Amount'] > 0).any():
        return _empty_figure()
    df = breakdown[breakdown['Amount'] > 0].assign(Value=lambda d: d['Amount'] / CENTS_PER_UNIT)
    fig = px.pie(df, names='Name', values='Value')
    fig.update_layout(title=title or "Budget breakdown")
    return fig


def create_badge_progress_chart(statuses: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Horizontal bar chart of progress towards each badge, coloured by rarity."""
    if statuses.empty:
        return _empty_figure("No badges to display")
    fig = px.bar(
        statuses,
        x='Percentage',
        y='Name',
        color='Rarity',
        orientation='h',
        range_x=[0, 100],
        hover_data=['Requirement', 'Earned'],
    )
    fig.update_layout(
        title=title or "Badge progress",
        xaxis_title="Progress (%)",
        yaxis_title="",
        yaxis={'categoryorder': 'array', 'categoryarray': list(statuses['Name'])[::-1]},
    )
    return fig
