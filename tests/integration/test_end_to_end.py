"""End-to-end tests: snapshot file -> pipeline -> rendered output.

Uses the FileAdapter against tests/fixtures/stations_sample.json, a trimmed
EstacionesTerrestres payload around central Madrid with two records that have
broken coordinates and one far-away station in Salamanca.
"""

import json

import pytest

from station_ranker.adapters import FileAdapter
from station_ranker.config.models import AppConfig
from station_ranker.domain.exceptions import MalformedBatch, NoRecordsInRange
from station_ranker.location import StaticLocationProvider
from station_ranker.pipeline import RankingPipeline, RankingSession
from station_ranker.presentation import ResultRenderer
from tests.helpers.fixture_adapter import FIXTURES_DIR

PUERTA_DEL_SOL = (40.4168, -3.7038)


def make_config(path=FIXTURES_DIR / "stations_sample.json", **ranking):
    return AppConfig.model_validate(
        {
            "source": {"type": "file", "path": str(path)},
            "location": {"type": "static", "latitude": PUERTA_DEL_SOL[0], "longitude": PUERTA_DEL_SOL[1]},
            "ranking": ranking,
        }
    )


def make_pipeline(config):
    return RankingPipeline(config, StaticLocationProvider(*PUERTA_DEL_SOL))


@pytest.mark.integration
class TestSnapshotRanking:
    """Rank the sample snapshot end to end."""

    def test_default_top_six(self):
        pipeline = make_pipeline(make_config())

        run_result = pipeline.run()

        assert isinstance(pipeline.adapter, FileAdapter)
        assert run_result.ok
        assert [r.record.label for r in run_result.result] == [
            "REPSOL",
            "CEPSA",
            "GALP",
            "SHELL",
            "BP",
            "PLENOIL",
        ]
        distances = [r.distance_km for r in run_result.result]
        assert distances == sorted(distances)
        assert run_result.result.fetched_count == 10
        assert run_result.result.normalized_count == 8
        assert run_result.result.rejections == {"missing_field": 1, "unparsable": 1}

    def test_radius_bound(self):
        run_result = make_pipeline(make_config(radius_km=3)).run()

        assert [r.record.label for r in run_result.result] == ["REPSOL", "CEPSA", "GALP"]
        assert all(r.distance_km <= 3 for r in run_result.result)

    def test_radius_with_nothing_in_range(self):
        run_result = make_pipeline(make_config(radius_km=0.5)).run()

        assert isinstance(run_result.error, NoRecordsInRange)

    def test_large_k_returns_every_valid_record(self):
        run_result = make_pipeline(make_config(top_k=50)).run()

        assert len(run_result.result) == 8
        assert run_result.result.records[-1].record.label == "CARREFOUR"
        assert run_result.result.records[-1].distance_km == pytest.approx(175, abs=10)

    def test_malformed_snapshot(self, tmp_path):
        path = tmp_path / "stations.json"
        path.write_text(json.dumps({"Fecha": "x", "ResultadoConsulta": "OK"}), encoding="utf-8")

        run_result = make_pipeline(make_config(path=path)).run()

        assert isinstance(run_result.error, MalformedBatch)
        assert run_result.message == "Station data was received in an unexpected format."

    def test_rendered_text(self):
        run_result = make_pipeline(make_config(top_k=3)).run()

        text = ResultRenderer().render_text(run_result)

        assert "1. REPSOL - 1,629 €/L - Madrid (988 m)" in text
        assert "   CALLE ALCALA, 40" in text
        assert "2 of 10 records were skipped" in text

    def test_session_publishes_latest(self):
        pipeline = make_pipeline(make_config(top_k=1))
        results = []

        with RankingSession(pipeline, on_result=results.append) as session:
            session.refresh().result(timeout=5)

        assert len(results) == 1
        assert session.latest is results[0]
        assert session.latest.result.records[0].record.label == "REPSOL"
