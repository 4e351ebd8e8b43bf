import sys
import os
import argparse
import importlib.metadata
import time
from . import tasks, dbutils
from .io import iobase


def main():
    """Main routine of the chado-das package"""

    # Parse the supplied command line arguments
    arguments = parse_arguments(sys.argv)

    # Check database access
    start_time = time.time()
    connection_params = dbutils.get_connection_parameters(arguments.config, arguments.use_password, arguments.dbname)
    connection_string = dbutils.generate_uri(connection_params)
    if tasks.check_access(connection_string):

        # Run the command
        try:
            tasks.run_command_with_arguments(arguments.command, arguments, connection_string)
        except iobase.AdaptorError as error:
            print("Error: " + str(error), file=sys.stderr)
            sys.exit(1)

    # Print run time
    if arguments.verbose:
        print("Runtime: {0:.2f} s".format(time.time()-start_time), file=sys.stderr)


def commands() -> dict:
    """Lists the available sub-commands of the 'chado-das' command with corresponding descriptions"""
    return {
        "segment": "resolve a landmark and print its extent",
        "search": "find features by name",
        "alias": "find features by name or synonym",
        "features": "list features by type, by ID or by location on a landmark",
        "summary": "estimate the density of features along a landmark",
        "attributes": "list the attributes of a feature"
    }


def parse_arguments(input_arguments: list) -> argparse.Namespace:
    """Defines the formal arguments of the 'chado-das' command and parses the actual arguments accordingly"""

    # Create a parser and add global formal arguments
    program_name = os.path.basename(input_arguments[0])
    parser = argparse.ArgumentParser(description="Landmark and interval queries on CHADO databases",
                                     epilog="For detailed usage information type '" + program_name + " <command> -h'",
                                     prog=program_name, allow_abbrev=False)
    parser.add_argument("-v", "--version", help="show the version of the software and exit",
                        action='version', version=software_version())

    # Add subparsers for all sub-commands
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    for command, description in commands().items():
        # Create subparser and add general and specific formal arguments
        sub = subparsers.add_parser(command, description=description, help=description)
        add_general_arguments(sub)
        add_adaptor_arguments(sub)
        add_arguments_by_command(command, sub)

    # Parse the actual arguments
    return parser.parse_args(input_arguments[1:])


def software_version() -> str:
    """Returns the version of the installed package"""
    try:
        return importlib.metadata.version("chado-das")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def add_general_arguments(parser: argparse.ArgumentParser):
    """Defines general formal arguments (available to all sub-commands)"""
    parser.add_argument("-V", "--verbose", action="store_true", help="verbose mode")
    parser_group = parser.add_mutually_exclusive_group(required=False)
    parser_group.add_argument("-c", "--config", default="", help="YAML file containing connection details")
    parser_group.add_argument("-p", "--use_password", action="store_true",
                              help="connect with password (default: no password)")
    parser.add_argument("-o", "--output_file", default="", help="file into which results are written (default: stdout)")
    parser.add_argument("dbname", help="name of the database")


def add_adaptor_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments overriding the options of the adaptor configuration file"""
    parser.add_argument("-A", "--adaptor_config", default="", help="YAML file containing adaptor options")
    parser.add_argument("-a", "--organism", help="organism: 'Genus species', common name or abbreviation")
    parser.add_argument("--reference_class", help="type of top-level reference sequences, e.g. 'chromosome'")
    parser.add_argument("--recursive_mapping", action="store_true", default=None,
                        help="map features onto the top-most reference sequence")
    parser.add_argument("--do_two_level", action="store_true", default=None,
                        help="fetch only one level of sub-features")
    parser.add_argument("--infer_cds", action="store_true", default=None,
                        help="infer CDS features from exons and polypeptides")
    parser.add_argument("--allow_obsolete", action="store_true", default=None, help="include obsolete features")
    parser.add_argument("--fulltext", action="store_true", default=None, help="use full-text search")
    parser.add_argument("--tripal", action="store_true", default=None,
                        help="database maintained by Tripal (scores are not read from 'analysisfeature')")
    parser.add_argument("--no_srcfeatureslice", action="store_false", default=None, dest="srcfeatureslice",
                        help="do not use the 'featureloc_slice' function for overlap queries")


def add_arguments_by_command(command: str, parser: argparse.ArgumentParser):
    """Defines formal arguments for a specified sub-command"""
    if command == "segment":
        add_segment_arguments(parser)
    elif command in ["search", "alias"]:
        add_search_arguments(parser)
    elif command == "features":
        add_features_arguments(parser)
    elif command == "summary":
        add_summary_arguments(parser)
    elif command == "attributes":
        add_attributes_arguments(parser)
    else:
        print("Command '" + parser.prog + "' is not available.")


def add_segment_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments for the 'chado-das segment' sub-command"""
    parser.add_argument("name", help="name of the landmark")
    parser.add_argument("--start", type=int, help="first base of the range (default: 1)")
    parser.add_argument("--end", type=int, help="last base of the range (default: end of the landmark)")


def add_search_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments for the 'chado-das search' and 'chado-das alias' sub-commands"""
    parser.add_argument("name", help="name to search for; '*' is a wildcard, 'id:<number>' a feature ID")
    parser.add_argument("--class", dest="class_name", help="type of the features to search for")
    parser.add_argument("--hierarchy", action="store_true", help="include sub-features")


def add_features_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments for the 'chado-das features' sub-command"""
    parser.add_argument("-t", "--types", nargs="+", help="feature types, as 'type' or 'type:source'")
    parser_group = parser.add_mutually_exclusive_group(required=False)
    parser_group.add_argument("--seq_id", help="name of the landmark on which features are located")
    parser_group.add_argument("--feature_id", type=int, help="ID of the feature")
    parser.add_argument("--start", type=int, help="first base of the range on the landmark")
    parser.add_argument("--end", type=int, help="last base of the range on the landmark")
    parser.add_argument("--attribute", action="append", default=[], metavar="TAG=VALUE",
                        help="restrict to features with a given property value (repeatable)")
    parser.add_argument("--hierarchy", action="store_true", help="include sub-features")


def add_summary_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments for the 'chado-das summary' sub-command"""
    parser.add_argument("seq_id", help="name of the landmark")
    parser.add_argument("-t", "--types", nargs="+", required=True, help="feature types, as 'type' or 'type:source'")
    parser.add_argument("--start", type=int, help="first base of the range (default: 1)")
    parser.add_argument("--end", type=int, help="last base of the range (default: end of the landmark)")
    parser.add_argument("--bins", type=int, help="number of bins (default: from the adaptor options)")


def add_attributes_arguments(parser: argparse.ArgumentParser):
    """Defines formal arguments for the 'chado-das attributes' sub-command"""
    parser.add_argument("uniquename", help="uniquename of the feature")
    parser.add_argument("--tag", help="name of a single attribute")
