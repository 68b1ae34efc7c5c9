from pathlib import Path

import pytest

from src.evacroute.data.evacuation_points import find_evacuation_points, load_evacuation_points


@pytest.fixture(autouse=True)
def clear_points_cache():
    load_evacuation_points.cache_clear()
    yield
    load_evacuation_points.cache_clear()


def _write_points(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "evacuation_points.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_evacuation_points_reads_catalogue(tmp_path: Path):
    path = _write_points(
        tmp_path,
        "Name,Latitude,Longitude,Type\n"
        "Civic Center Shelter,37.7793,-122.4193,Shelter\n"
        "General Hospital,37.7557,-122.4047,Medical\n"
        "High School Gym,37.7300,-122.4500,\n"
        "Missing Coordinates,,,Shelter\n",
    )

    points = load_evacuation_points(path)

    assert [point.name for point in points] == ["Civic Center Shelter", "General Hospital", "High School Gym"]
    assert points[0].coordinate.latitude == 37.7793
    assert points[0].coordinate.longitude == -122.4193
    assert points[1].category == "Medical"
    assert points[2].category == "Evacuation Point"


def test_load_evacuation_points_skips_out_of_range_rows(tmp_path: Path):
    path = _write_points(tmp_path, "Name,Latitude,Longitude\nBad,95.0,10.0\nGood,45.0,10.0\n")

    points = load_evacuation_points(path)

    assert [point.name for point in points] == ["Good"]


def test_load_evacuation_points_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_evacuation_points(tmp_path / "missing.csv")


def test_load_evacuation_points_without_header(tmp_path: Path):
    path = _write_points(tmp_path, "")

    with pytest.raises(ValueError):
        load_evacuation_points(path)


def test_find_evacuation_points_filters_by_name(tmp_path: Path):
    path = _write_points(
        tmp_path,
        "Name,Latitude,Longitude,Type\n"
        "Civic Center Shelter,37.7793,-122.4193,Shelter\n"
        "General Hospital,37.7557,-122.4047,Medical\n",
    )

    assert [p.name for p in find_evacuation_points(["general hospital"], source=path)] == ["General Hospital"]
    assert len(find_evacuation_points(None, source=path)) == 2
