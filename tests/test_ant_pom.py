"""Tests for embedded pom selection and decoding."""
from __future__ import annotations

import pytest

from buildtools.ant.pom import PomDecodeError, decode_pom, select_pom_entry
from conftest import pom_xml


class TestSelectPomEntry:
    """Test candidate selection among jar entries."""

    def test_shortest_candidate_wins(self):
        names = ["META-INF/maven/a/b/pom.xml", "META-INF/pom.xml"]
        assert select_pom_entry(names) == "META-INF/pom.xml"

    def test_shortest_wins_regardless_of_order(self):
        names = ["META-INF/pom.xml", "META-INF/maven/a/b/pom.xml"]
        assert select_pom_entry(names) == "META-INF/pom.xml"

    def test_tie_keeps_first_in_container_order(self):
        names = ["META-INF/maven/x/a/pom.xml", "META-INF/maven/y/b/pom.xml"]
        assert select_pom_entry(names) == "META-INF/maven/x/a/pom.xml"

    def test_non_meta_inf_poms_are_ignored(self):
        names = ["pom.xml", "lib/pom.xml", "META-INF/pom.properties"]
        assert select_pom_entry(names) is None

    def test_suffix_match_is_literal(self):
        # "effective-pom.xml" still ends with pom.xml
        assert select_pom_entry(["META-INF/effective-pom.xml"]) == "META-INF/effective-pom.xml"

    def test_no_entries(self):
        assert select_pom_entry([]) is None


class TestDecodePom:
    """Test decoding pom bytes into coordinates."""

    def test_namespaced_pom(self):
        coords = decode_pom(pom_xml().encode("utf-8"))
        assert (coords.group_id, coords.artifact_id, coords.version) == ("com.example", "lib", "1.2.3")

    def test_plain_pom(self):
        coords = decode_pom(pom_xml(namespaced=False).encode("utf-8"))
        assert (coords.group_id, coords.artifact_id, coords.version) == ("com.example", "lib", "1.2.3")

    def test_values_are_stripped(self):
        data = b"<project><groupId>\n  g \n</groupId><artifactId> a </artifactId><version> 1 </version></project>"
        coords = decode_pom(data)
        assert (coords.group_id, coords.artifact_id, coords.version) == ("g", "a", "1")

    def test_parent_values_are_not_inherited(self):
        data = b"""<project xmlns="http://maven.apache.org/POM/4.0.0">
  <parent>
    <groupId>org.parent</groupId>
    <artifactId>parent</artifactId>
    <version>5.0</version>
  </parent>
  <artifactId>child</artifactId>
</project>"""
        coords = decode_pom(data)
        assert (coords.group_id, coords.artifact_id, coords.version) == ("", "child", "")

    def test_own_values_used_alongside_parent(self):
        data = b"""<project>
  <parent><groupId>org.parent</groupId><version>5.0</version></parent>
  <groupId>org.child</groupId><artifactId>child</artifactId><version>1.0</version>
</project>"""
        coords = decode_pom(data)
        assert (coords.group_id, coords.version) == ("org.child", "1.0")

    def test_dependency_coordinates_are_not_mistaken_for_project(self):
        data = b"""<project>
  <artifactId>app</artifactId>
  <dependencies>
    <dependency><groupId>junit</groupId><artifactId>junit</artifactId><version>4.13.2</version></dependency>
  </dependencies>
</project>"""
        coords = decode_pom(data)
        assert (coords.group_id, coords.artifact_id, coords.version) == ("", "app", "")

    def test_missing_artifact_id_decodes_empty(self):
        coords = decode_pom(pom_xml(artifact=None).encode("utf-8"))
        assert (coords.group_id, coords.artifact_id, coords.version) == ("com.example", "", "1.2.3")

    def test_malformed_xml_fails(self):
        with pytest.raises(PomDecodeError):
            decode_pom(b"<project><Invalid XML>")

    def test_wrong_root_fails(self):
        with pytest.raises(PomDecodeError):
            decode_pom(b"<settings><artifactId>x</artifactId></settings>")

    def test_doctype_without_entities_is_accepted(self):
        data = b'<?xml version="1.0"?><!DOCTYPE project><project><groupId>g</groupId><artifactId>a</artifactId></project>'
        coords = decode_pom(data)
        assert (coords.group_id, coords.artifact_id) == ("g", "a")

    def test_entity_declarations_are_refused(self):
        data = b'<?xml version="1.0"?><!DOCTYPE project [<!ENTITY a "x">]><project><artifactId>&a;</artifactId></project>'
        with pytest.raises(PomDecodeError):
            decode_pom(data)
