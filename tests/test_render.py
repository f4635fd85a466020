"""
Test suite for plotly rendering and click picking.

Tests cover:
- Info panel text
- Selection list rows
- Click payload conversion
- Scene figure structure
"""

import pytest
import plotly.graph_objects as go
from orrery import BodyId, Catalog, Pick, Simulation
from orrery.render import event_from_click, info_panel, listing_rows, scene_figure


@pytest.fixture
def catalog():
    return Catalog()


class TestInfoPanel:
    """Test information panel lines."""

    def test_earth(self, catalog):
        lines = info_panel(catalog.record(BodyId.EARTH), catalog)
        assert lines[0] == 'Earth'
        assert lines[1] == 'Mass: 5.9724x10^24 kg'
        assert lines[2] == 'Diameter: 12742 km'
        assert lines[3] == 'Distance from what it orbits: 1 AU'
        assert lines[4] == 'Number of moons: 1'
        assert lines[5] == 'Average temperature: 15°C'
        assert lines[8] == 'Orbits: Sun'
        assert lines[9].startswith('Fun fact: ')

    def test_moon_orbits_planet(self, catalog):
        lines = info_panel(catalog.record(BodyId.EARTH_MOON), catalog)
        assert lines[0] == 'Moon'
        assert lines[8] == 'Orbits: Earth'

    def test_unknown_rotation(self, catalog):
        lines = info_panel(catalog.record(BodyId.HALIMEDE), catalog)
        assert lines[7] == 'Period of rotation: unknown'


class TestListing:
    """Test the grouped selection list."""

    def test_rows(self, catalog):
        rows = listing_rows(catalog)
        assert rows[0] == ['Sun']
        assert len(rows) == 9
        assert rows[3][:2] == ['Earth', 'Moon']
        assert sum(len(row) for row in rows) == len(catalog)


class TestClickPicking:
    """Test conversion of plotly click data into Pick events."""

    def test_click_payload(self):
        event = event_from_click({'points': [{'customdata': 'earth'}]})
        assert event == Pick(BodyId.EARTH)

    def test_point_list_with_array_customdata(self):
        assert event_from_click([{'customdata': ['io']}]) == Pick(BodyId.IO)

    def test_skips_non_body_points(self):
        click = {'points': [{'x': 1.0}, {'customdata': 'orbit'},
                            {'customdata': 'mars'}]}
        assert event_from_click(click) == Pick(BodyId.MARS)

    @pytest.mark.parametrize("click", [None, {}, {'points': []},
                                       [{'customdata': 42}]])
    def test_nothing_pickable(self, click):
        assert event_from_click(click) is None


class TestSceneFigure:
    """Test the 3D scene figure."""

    def test_trace_counts(self):
        sim = Simulation()
        fig = scene_figure(sim, n_points=16)
        assert isinstance(fig, go.Figure)
        # surface + marker per body, one orbit per non-Sun body
        assert len(fig.data) == 2 * 32 + 31
        assert len(scene_figure(sim, show_orbits=False).data) == 64

    def test_markers_carry_body_id(self):
        fig = scene_figure(Simulation(), show_orbits=False)
        assert fig.data[1].customdata[0] == 'sun'

    def test_camera_follows_pose(self):
        sim = Simulation()
        fig = scene_figure(sim, show_orbits=False)
        camera = fig.layout.scene.camera
        assert camera.up.y == 1
        assert camera.eye.z > 0
        assert len(fig.layout.annotations) == 0

    def test_selected_body_annotation(self):
        sim = Simulation()
        sim.pick('Earth')
        sim.tick(1 / 60)
        fig = scene_figure(sim, show_orbits=False)
        assert len(fig.layout.annotations) == 1
        assert 'Earth' in fig.layout.annotations[0].text

    def test_invalid_points(self):
        with pytest.raises(ValueError, match="n_points"):
            scene_figure(Simulation(), n_points=1)

    def test_planets_with_moons_are_translucent(self):
        """Moons orbit inside their planet's exaggerated sphere, so hosts are see-through."""
        fig = scene_figure(Simulation(), show_orbits=False)
        surfaces = {trace.name: trace for trace in fig.data if trace.type == 'surface'}
        assert surfaces['Earth'].opacity == pytest.approx(0.35)
        assert surfaces['Jupiter'].opacity == pytest.approx(0.35)
        assert surfaces['Mercury'].opacity == 1.0
        assert surfaces['Sun'].opacity == 1.0
        assert surfaces['Moon'].opacity == 1.0
