"""Unit tests for intermediate record files."""
import json

import pytest

from processor.errors import RecordFileError
from processor.models import Fixture, Result
from processor.records import records_from_json, records_to_json, slugify


class TestRecordsJson:
    """Test cases for the record file codec."""

    def test_encodes_indented_array(self):
        """Test records are written as an indented JSON array."""
        fixture = Fixture('28/10/25', '20:30', 'Railway', 'Dragons', 'Club A')

        text = records_to_json([fixture])

        assert text.startswith('[\n  {')
        assert json.loads(text) == [{
            'date': '28/10/25',
            'time': '20:30',
            'home_team': 'Railway',
            'away_team': 'Dragons',
            'venue': 'Club A',
        }]

    def test_result_key_selects_result_type(self):
        """Test entries with a result key load as Result."""
        text = json.dumps([
            {'date': '28/10/25', 'time': '20:30', 'home_team': 'A', 'away_team': 'B', 'venue': 'Hall'},
            {'date': '21/10/25', 'time': '20:00', 'home_team': 'C', 'away_team': 'D', 'venue': '', 'result': '3-1'},
        ])

        records = records_from_json(text)

        assert type(records[0]) is Fixture
        assert isinstance(records[1], Result)
        assert records[1].result == '3-1'

    def test_missing_fields_default_to_empty(self):
        """Test absent fields load as empty strings."""
        records = records_from_json('[{"date": "28/10/25"}]')

        assert records == [Fixture('28/10/25', '', '', '', '')]

    def test_non_object_entries_are_skipped(self):
        """Test entries that are not objects are dropped."""
        records = records_from_json('[1, {"date": "28/10/25", "time": "20:30"}]')

        assert len(records) == 1

    @pytest.mark.parametrize('text', ['{not json', '{"date": "28/10/25"}'])
    def test_invalid_file_raises(self, text):
        """Test malformed record files raise RecordFileError."""
        with pytest.raises(RecordFileError):
            records_from_json(text)


class TestSlugify:
    """Test cases for slugify."""

    @pytest.mark.parametrize('name, expected', [
        ('Railway', 'railway'),
        ('Railway A', 'railway-a'),
        ('The  Eagles', 'the--eagles'),
    ])
    def test_slugify(self, name, expected):
        """Test names are lowercased with whitespace replaced by hyphens."""
        assert slugify(name) == expected
