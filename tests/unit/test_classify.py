"""Unit tests for layer classification."""
from config.schemas import RoleKeywords, StyleRole
from restyle_core.core.classify import classify, classify_all, layer_matches
from restyle_core.core.surface import RenderLayer


def _layers(*ids):
    return [RenderLayer(id=i) for i in ids]


class TestClassify:
    """Test suite for keyword classification."""

    def test_layer_can_belong_to_several_roles(self):
        layers = _layers("park_label", "road_1")
        labels = classify(layers, StyleRole.LABELS)
        land = classify(layers, StyleRole.LAND)
        assert [l.id for l in labels] == ["park_label"]
        assert [l.id for l in land] == ["park_label"]

    def test_substring_match_not_tokenized(self):
        layers = _layers("roadside_parking")
        assert [l.id for l in classify(layers, StyleRole.ROADS)] == ["roadside_parking"]

    def test_case_insensitive_on_id_and_source_layer(self):
        layers = [
            RenderLayer(id="Motorway_Major"),
            RenderLayer(id="layer-7", source_layer="Transportation_STREET"),
            RenderLayer(id="hillshade"),
        ]
        result = classify(layers, StyleRole.ROADS)
        assert [l.id for l in result] == ["Motorway_Major", "layer-7"]

    def test_preserves_original_order(self):
        layers = _layers("water_b", "land", "lake_a", "ocean")
        assert [l.id for l in classify(layers, StyleRole.WATER)] == ["water_b", "lake_a", "ocean"]

    def test_empty_result_is_not_an_error(self):
        assert classify(_layers("hillshade", "raster"), StyleRole.BUILDINGS) == []

    def test_custom_keyword_table(self):
        table = RoleKeywords.from_dict({"buildings": ["Housing"]})
        layers = _layers("housing_blocks", "building")
        assert [l.id for l in classify(layers, StyleRole.BUILDINGS, table)] == ["housing_blocks"]

    def test_classify_all_uses_fixed_role_order(self, surface):
        result = classify_all(surface.layers())
        assert list(result) == [StyleRole.WATER, StyleRole.LAND, StyleRole.ROADS,
                                StyleRole.BUILDINGS, StyleRole.LABELS]
        assert [l.id for l in result[StyleRole.WATER]] == ["coastline"]
        assert [l.id for l in result[StyleRole.LAND]] == ["background", "countries-fill"]
        assert [l.id for l in result[StyleRole.LABELS]] == ["place_label", "poi_icon"]

    def test_layer_matches_with_missing_source_layer(self):
        assert layer_matches(RenderLayer(id="lake"), ("lake",)) is True
        assert layer_matches(RenderLayer(id=""), ("lake",)) is False
