import logging

from bombuilder.core.version_properties import assign_property_name, property_reference


def test_conflicting_versions_in_group_fall_back_to_artifact_name():
    properties: dict[str, str] = {}
    assert assign_property_name("a", "x", "1.0", properties) == "version.a"
    assert assign_property_name("a", "y", "2.0", properties) == "version.a.y"
    assert properties == {"version.a": "1.0", "version.a.y": "2.0"}


def test_matching_versions_share_group_property():
    properties: dict[str, str] = {}
    assert assign_property_name("a", "x", "1.0", properties) == "version.a"
    assert assign_property_name("a", "y", "1.0", properties) == "version.a"
    assert properties == {"version.a": "1.0"}


def test_properties_keep_first_insertion_order():
    properties = {"project.build.sourceEncoding": "utf-8"}
    assign_property_name("org.codehaus.plexus", "plexus-utils", "1.2.3", properties)
    assign_property_name("com.acme", "api", "2.0", properties)
    assert list(properties) == [
        "project.build.sourceEncoding",
        "version.org.codehaus.plexus",
        "version.com.acme",
    ]


def test_fallback_collision_overwrites_and_warns(caplog):
    properties: dict[str, str] = {}
    assign_property_name("a", "x", "1.0", properties)
    assign_property_name("a", "y", "2.0", properties)
    with caplog.at_level(logging.WARNING):
        name = assign_property_name("a", "y", "3.0", properties)
    assert name == "version.a.y"
    assert list(properties) == ["version.a", "version.a.y"]
    assert properties["version.a.y"] == "3.0"
    assert "version.a.y" in caplog.text


def test_property_reference():
    assert property_reference("version.a") == "${version.a}"
