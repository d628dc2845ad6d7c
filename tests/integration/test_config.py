"""Integration tests for event settings loaded from YAML."""

from datetime import date

from config import load_event_settings


class TestLoadEventSettings:

    def test_missing_file_gives_defaults(self, temp_dir):
        settings = load_event_settings(temp_dir / "missing.yaml")
        assert settings.title == "Hackathon"
        assert settings.venue == "ROMA"
        assert settings.start_date is None
        assert settings.end_date is None

    def test_load(self, temp_dir):
        path = temp_dir / "event.yaml"
        path.write_text(
            "title: Spring Hack\n"
            "venue: parigi\n"
            "start_date: 2025-05-15\n"
            "max_team_size: 5\n"
            "organizer:\n"
            "  id: 3\n"
            "  first_name: Grace\n"
            "  last_name: Hopper\n"
            "  password: cobol\n"
        )

        settings = load_event_settings(path)

        assert settings.title == "Spring Hack"
        assert settings.venue == "PARIGI"
        assert settings.start_date == date(2025, 5, 15)
        assert settings.end_date == date(2025, 5, 19)
        assert settings.max_team_size == 5
        assert settings.organizer.first_name == "Grace"

    def test_empty_file(self, temp_dir):
        path = temp_dir / "event.yaml"
        path.write_text("")
        assert load_event_settings(path).max_team_size == 4
