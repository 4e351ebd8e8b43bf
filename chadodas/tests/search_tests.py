import unittest
from .. import config, utils
from ..io import search
from . import fixtures


class TestSearchPreparation(unittest.TestCase):
    """Tests the conversion of search strings into SQL patterns"""

    def test_fulltext_spaces(self):
        self.assertEqual(search.prepare_fulltext_spaces("protein kinase"), "protein & kinase")
        self.assertEqual(search.prepare_fulltext_spaces("protein & kinase"), "protein & kinase")

    def test_wildcards(self):
        self.assertEqual(search.prepare_wildcards("PF3D7_01*", False), "PF3D7\\_01%")
        self.assertEqual(search.prepare_wildcards("100%*", False), "100\\%%")
        self.assertEqual(search.prepare_wildcards("kinase*", True), "kinase:*")
        self.assertEqual(search.prepare_wildcards("*kinase & prot*", True), "kinase & prot:*")


class TestFeatureSearchQueryBuilder(unittest.TestCase):
    """Tests the statements built for name and alias searches"""

    def setUp(self):
        self.context = fixtures.create_context(organism_id=3)
        self.builder = search.FeatureSearchQueryBuilder(self.context)

    def test_feature_id(self):
        # Tests that explicit feature IDs bypass the search
        query = self.builder.build("id:1234", "gene")
        self.assertTrue(query.direct)
        self.assertEqual(query.feature_id, 1234)
        self.assertIsNone(query.sql)
        self.assertFalse(self.builder.build("gene:1234").direct)

    def test_exact_name(self):
        # Tests an exact, case-insensitive name search restricted to a class
        query = self.builder.build("PF3D7_0100100", "gene")
        self.assertFalse(query.direct)
        self.assertFalse(query.wildcard)
        self.assertFalse(query.unknown_class)
        self.assertIn("FROM feature f", query.sql)
        self.assertIn("lower(f.name) = :name", query.sql)
        self.assertIn("f.organism_id = :organism_id", query.sql)
        self.assertIn("f.type_id IN :type_ids", query.sql)
        self.assertEqual(query.parameters, {"name": "pf3d7_0100100", "organism_id": 3, "type_ids": [12]})
        statement = query.statement()
        self.assertTrue(statement._bindparams["type_ids"].expanding)

    def test_wildcard_ignores_class(self):
        # Tests that wildcard searches drop the class filter
        query = self.builder.build("PF3D7_01*", "gene")
        self.assertTrue(query.wildcard)
        self.assertIsNone(query.type_ids)
        self.assertIn("lower(f.name) LIKE :name", query.sql)
        self.assertNotIn(":type_ids", query.sql)
        self.assertEqual(query.parameters["name"], "pf3d7\\_01%")

    def test_unknown_class(self):
        # Tests that a class without ontology term yields a query that finds nothing
        query = self.builder.build("PF3D7_0100100", "pseudogenic_transcript")
        self.assertTrue(query.unknown_class)

    def test_inferred_cds_class(self):
        # Tests that inferred CDS are searched through their polypeptides
        self.context.config = config.AdaptorConfig(infer_cds=True)
        query = self.builder.build("PF3D7_0100100.1:pep", "CDS")
        self.assertEqual(query.type_ids, [15])
        query = self.builder.build("PF3D7_0100100.1:pep", "polypeptide")
        self.assertEqual(query.type_ids, [15])

    def test_homonymous_class(self):
        # Tests that all homonymous terms of a class are searched
        query = self.builder.build("exon1", "exon")
        self.assertEqual(query.type_ids, [14, 30])

    def test_fulltext(self):
        # Tests the full-text search
        query = self.builder.build("protein kin*", fulltext=True)
        self.assertIn("f.searchable_name @@ to_tsquery(:name)", query.sql)
        self.assertEqual(query.parameters["name"], "protein & kin:*")

    def test_alias_search(self):
        # Tests the alias search on synonyms, and on 'all_feature_names' if available
        query = self.builder.build("MAL1P1.1", operation=search.SearchOperation.BY_ALIAS)
        self.assertIn("FROM feature_synonym fs", query.sql)
        self.assertIn("lower(s.synonym_sgml) = :name", query.sql)
        self.assertIn("f.organism_id = :organism_id", query.sql)

        self.context._all_feature_names = True
        query = self.builder.build("MAL1P1.1", operation=search.SearchOperation.BY_ALIAS)
        self.assertIn("FROM all_feature_names afn", query.sql)
        self.assertIn("lower(afn.name) = :name", query.sql)
        self.assertIn("afn.organism_id = :organism_id", query.sql)

    def test_strip_source(self):
        # Tests that a known source is removed from the search string
        self.context.client.responder.responses["query_source_dbxrefs"] = [
            utils.EmptyObject(dbxref_id=500, accession="EuPathDB", db_id=3)]
        self.assertEqual(self.builder.strip_source("EuPathDB:PF3D7_0100100"), "PF3D7_0100100")
        self.assertEqual(self.builder.strip_source("GeneDB:PF3D7_0100100"), "GeneDB:PF3D7_0100100")
        self.assertEqual(self.builder.strip_source("PF3D7_0100100"), "PF3D7_0100100")
        query = self.builder.build("EuPathDB:PF3D7_0100100")
        self.assertEqual(query.parameters["name"], "pf3d7_0100100")


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
