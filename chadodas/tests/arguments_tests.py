import unittest
from .. import chado_das


class TestCommands(unittest.TestCase):
    """Tests if all implemented sub-commands are available through the entry point"""

    def test_commands(self):
        commands = chado_das.commands()
        self.assertEqual(len(commands), 6)
        for command in ["segment", "search", "alias", "features", "summary", "attributes"]:
            self.assertIn(command, commands)


class TestArguments(unittest.TestCase):
    """Tests if the command line arguments are parsed correctly"""

    def test_general_args(self):
        # Tests the arguments shared by all sub-commands
        args = ["chado-das", "segment", "-V", "-c", "connection.yml", "-o", "out.gff", "testdb", "chr1"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["command"], "segment")
        self.assertTrue(parsed_args["verbose"])
        self.assertEqual(parsed_args["config"], "connection.yml")
        self.assertFalse(parsed_args["use_password"])
        self.assertEqual(parsed_args["output_file"], "out.gff")
        self.assertEqual(parsed_args["dbname"], "testdb")
        self.assertEqual(parsed_args["name"], "chr1")
        self.assertIsNone(parsed_args["start"])
        self.assertIsNone(parsed_args["end"])

        # Connection file and password are mutually exclusive
        with self.assertRaises(SystemExit):
            chado_das.parse_arguments(["chado-das", "segment", "-c", "conn.yml", "-p", "testdb", "chr1"])

    def test_adaptor_args(self):
        # Tests that unset adaptor options do not override the configuration file
        args = ["chado-das", "search", "testdb", "PF3D7_0100100"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["adaptor_config"], "")
        for option in ["organism", "reference_class", "recursive_mapping", "do_two_level", "infer_cds",
                       "allow_obsolete", "fulltext", "tripal", "srcfeatureslice"]:
            self.assertIsNone(parsed_args[option], option)

        args = ["chado-das", "search", "-A", "adaptor.yml", "-a", "Plasmodium falciparum", "--reference_class",
                "chromosome", "--infer_cds", "--allow_obsolete", "--fulltext", "--tripal", "--no_srcfeatureslice",
                "testdb", "PF3D7_0100100"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["adaptor_config"], "adaptor.yml")
        self.assertEqual(parsed_args["organism"], "Plasmodium falciparum")
        self.assertEqual(parsed_args["reference_class"], "chromosome")
        self.assertTrue(parsed_args["infer_cds"])
        self.assertTrue(parsed_args["allow_obsolete"])
        self.assertTrue(parsed_args["fulltext"])
        self.assertTrue(parsed_args["tripal"])
        self.assertFalse(parsed_args["srcfeatureslice"])
        self.assertIsNone(parsed_args["recursive_mapping"])

    def test_search_args(self):
        args = ["chado-das", "alias", "--class", "gene", "--hierarchy", "testdb", "MAL1P1.1"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["command"], "alias")
        self.assertEqual(parsed_args["class_name"], "gene")
        self.assertTrue(parsed_args["hierarchy"])
        self.assertEqual(parsed_args["name"], "MAL1P1.1")

    def test_features_args(self):
        args = ["chado-das", "features", "-t", "gene", "mRNA:EuPathDB", "--seq_id", "chr1", "--start", "100",
                "--end", "2000", "--attribute", "product=kinase", "--attribute", "colour=2", "testdb"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["types"], ["gene", "mRNA:EuPathDB"])
        self.assertEqual(parsed_args["seq_id"], "chr1")
        self.assertIsNone(parsed_args["feature_id"])
        self.assertEqual(parsed_args["start"], 100)
        self.assertEqual(parsed_args["end"], 2000)
        self.assertEqual(parsed_args["attribute"], ["product=kinase", "colour=2"])
        self.assertFalse(parsed_args["hierarchy"])

        args = ["chado-das", "features", "--feature_id", "12", "testdb"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["feature_id"], 12)
        self.assertEqual(parsed_args["attribute"], [])

        # Landmark and feature ID are mutually exclusive
        with self.assertRaises(SystemExit):
            chado_das.parse_arguments(["chado-das", "features", "--seq_id", "chr1", "--feature_id", "12", "testdb"])

    def test_summary_args(self):
        args = ["chado-das", "summary", "-t", "gene", "--bins", "50", "testdb", "chr1"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["seq_id"], "chr1")
        self.assertEqual(parsed_args["types"], ["gene"])
        self.assertEqual(parsed_args["bins"], 50)

        # Types are required
        with self.assertRaises(SystemExit):
            chado_das.parse_arguments(["chado-das", "summary", "testdb", "chr1"])

    def test_attributes_args(self):
        args = ["chado-das", "attributes", "--tag", "product", "testdb", "PF3D7_0100100.1:pep"]
        parsed_args = vars(chado_das.parse_arguments(args))
        self.assertEqual(parsed_args["uniquename"], "PF3D7_0100100.1:pep")
        self.assertEqual(parsed_args["tag"], "product")


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
