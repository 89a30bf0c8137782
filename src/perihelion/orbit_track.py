'''Interplanetary network simulation package
OrbitTrack class definition'''

import numpy as np
import pandas as pd
from numbers import Real
from datetime import datetime
from typing import Optional, Union
import plotly.graph_objects as go

from .config import config
from .orbital_elements import OrbitalElements
from .propagator import TimeLike, days_since_epoch, position, rotation

class OrbitTrack:
    """
    A body's orbit sampled over a time window.

    Times are held as days since J2000; constructor and query arguments
    may be datetimes or days.

    Attributes:
        body: The OrbitalElements being tracked (immutable)
        t0: Start of the window [days since J2000]
        tf: End of the window [days since J2000]
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, body: OrbitalElements, t0: TimeLike, tf: TimeLike):
        body.validate()
        t0 = days_since_epoch(t0)
        tf = days_since_epoch(tf)
        if tf <= t0:
            raise ValueError(f"tf ({tf}) must be > t0 ({t0})")
        self._body = body
        self._t0 = t0
        self._tf = tf

    @classmethod
    def full_orbit(cls, body: OrbitalElements, t0: TimeLike = 0.0) -> "OrbitTrack":
        """Track covering exactly one orbital period from t0."""
        t0 = days_since_epoch(t0)
        return cls(body, t0, t0 + body.orbital_period)

    # ========== PROPERTY ACCESS ==========
    @property
    def body(self) -> OrbitalElements:
        return self._body

    @property
    def t0(self) -> float:
        return self._t0

    @property
    def tf(self) -> float:
        return self._tf

    @property
    def duration(self) -> float:
        """Window length [days]"""
        return self.tf - self.t0

    # ========== UTILITY METHODS ==========
    def position_at(self, t: TimeLike) -> np.ndarray:
        """
        Heliocentric position at time t.

        Parameters:
            t: Time to query (must be in [t0, tf])
        """
        t = days_since_epoch(t)
        self._validate_time(t)
        return position(self._body, t)

    def evaluate(self, times: Union[TimeLike, np.ndarray, list]) -> np.ndarray:
        """
        Positions at one or more times.

        Returns:
            Array of shape (3,) if times is scalar,
            Array of shape (n_times, 3) if times is array-like
        """
        if isinstance(times, (datetime, Real)):
            return self.position_at(times)
        days = np.array([days_since_epoch(t) for t in times], dtype=float)
        for t in days:
            self._validate_time(t)
        if len(days) == 0:
            return np.empty((0, 3))
        return np.array([position(self._body, t) for t in days])

    def sample(self, n_points: Optional[int] = None) -> np.ndarray:
        """
        Uniformly sample the window in time.

        Parameters:
            n_points: Number of points (default: config.DEFAULT_PLOT_POINTS)

        Returns:
            Array of shape (n_points, 3)
        """
        return self.evaluate(self.get_times(n_points))

    def get_times(self, n_points: Optional[int] = None) -> np.ndarray:
        """Generate uniform time array spanning the window."""
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        if n_points < 2:
            raise ValueError("n_points must be at least 2, use .position_at()")
        return np.linspace(self.t0, self.tf, n_points)

    def _validate_time(self, t: float):
        """Validate that time is within the window."""
        if not (self.t0 <= t <= self.tf):
            raise ValueError(
                f"Time {t} outside track bounds [{self.t0}, {self.tf}]"
            )

    def contains_time(self, t: TimeLike) -> bool:
        """Check if time is within the window."""
        return self.t0 <= days_since_epoch(t) <= self.tf

    def to_dataframe(self, times: Optional[np.ndarray] = None,
                     n_points: Optional[int] = None) -> pd.DataFrame:
        """
        Export the track to pandas DataFrame.

        Parameters:
            times: Specific times to evaluate. If None, uses uniform sampling.
            n_points: Number of uniform samples if times not provided

        Returns:
            DataFrame with columns time, x, y, z, spin
        """
        if times is None:
            times = self.get_times(n_points)
        else:
            times = np.array([days_since_epoch(t) for t in times], dtype=float)

        positions = self.evaluate(times)
        spins = [rotation(self._body, t).spin for t in times]
        return pd.DataFrame({
            'time': times,
            'x': positions[:, 0],
            'y': positions[:, 1],
            'z': positions[:, 2],
            'spin': spins,
        })

    def slice(self, t_start: TimeLike, t_end: TimeLike) -> "OrbitTrack":
        """
        Extract a sub-window as a new OrbitTrack.

        Raises:
            ValueError: If slice bounds are invalid or outside track bounds
        """
        t_start = days_since_epoch(t_start)
        t_end = days_since_epoch(t_end)
        if t_start >= t_end:
            raise ValueError(f"t_start ({t_start}) must be < t_end ({t_end})")
        if t_start < self.t0 or t_end > self.tf:
            raise ValueError(
                f"Slice bounds [{t_start}, {t_end}] outside track "
                f"bounds [{self.t0}, {self.tf}]"
            )
        return OrbitTrack(self._body, t_start, t_end)

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"OrbitTrack(body={self.body.id}, "
                f"t0={self.t0}, tf={self.tf}, duration={self.duration})")

    def __call__(self, t: TimeLike) -> np.ndarray:
        """Syntactic sugar for .position_at(t)."""
        return self.position_at(t)

    # ========== PLOTTING ==========
    def plot_3d(self, n_points: Optional[int] = None, show_sun: bool = True,
                track_color: Optional[str] = None,
                sun_color: Optional[str] = None,
                marker_color: Optional[str] = None) -> go.Figure:
        """
        Create 3D plot of the track with the Sun at the origin.

        The body is marked at the end of the window.

        Returns:
            Plotly Figure object
        """
        track_color = track_color or config.DEFAULT_TRACK_COLOR
        sun_color = sun_color or config.DEFAULT_BODY_COLOR
        marker_color = marker_color or config.DEFAULT_NODE_COLOR

        fig = go.Figure()
        if show_sun:
            fig.add_trace(go.Scatter3d(
                x=[0.0], y=[0.0], z=[0.0],
                mode='markers',
                marker=dict(color=sun_color, size=8),
                name='Sun',
                hoverinfo='name'
            ))

        self.add_to_plot(fig, n_points=n_points, color=track_color,
                         name=self.body.id)

        end = self.position_at(self.tf)
        fig.add_trace(go.Scatter3d(
            x=[end[0]], y=[end[1]], z=[end[2]],
            mode='markers',
            marker=dict(color=marker_color, size=5),
            name=f'{self.body.id} at t={self.tf:.1f} d',
            hovertemplate='x: %{x:.4f}<br>y: %{y:.4f}<br>z: %{z:.4f}<extra></extra>'
        ))

        fig.update_layout(
            scene=dict(
                xaxis_title='X [AU]',
                yaxis_title='Y [AU]',
                zaxis_title='Z [AU]',
                aspectmode='data'
            ),
            title=f'Orbit of {self.body.id}',
            showlegend=True
        )
        return fig

    def add_to_plot(self, fig: go.Figure, n_points: Optional[int] = None,
                    color: Optional[str] = None, name: Optional[str] = None,
                    **kwargs) -> go.Figure:
        """
        Add this track to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            n_points: Number of points to sample
            color: Color of track line
            name: Legend name for this track (default: body id)
            **kwargs: Additional arguments passed to Scatter3d

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        positions = self.sample(n_points)
        fig.add_trace(go.Scatter3d(
            x=positions[:, 0],
            y=positions[:, 1],
            z=positions[:, 2],
            mode='lines',
            line=dict(color=color or config.DEFAULT_TRACK_COLOR, width=3),
            name=name or self.body.id,
            hovertemplate='x: %{x:.4f}<br>y: %{y:.4f}<br>z: %{z:.4f}<extra></extra>',
            **kwargs
        ))
        return fig
