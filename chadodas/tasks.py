from . import utils, dbutils, config
from .io import iobase, adaptor, gff


def check_access(connection_uri: str) -> bool:
    """Checks if the database of interest exists and is accessible"""
    if dbutils.exists(connection_uri):
        return True
    print("Database does not exist. Task can't be completed.")
    return False


def adaptor_config_from_arguments(arguments) -> config.AdaptorConfig:
    """Creates the adaptor configuration from a YAML file and command line overrides"""
    overrides = {option: getattr(arguments, option, None) for option in config.option_names()}
    return config.load_config(arguments.adaptor_config, **overrides)


def parse_attribute_filters(filters: list) -> dict:
    """Converts 'TAG=VALUE' strings into a dictionary"""
    attributes = {}
    for attribute_filter in filters:
        tag, separator, value = attribute_filter.partition("=")
        if not separator or not tag:
            raise iobase.ConfigurationError("Attribute filter '" + attribute_filter
                                            + "' is not of the form TAG=VALUE")
        attributes[tag] = value
    return attributes


def run_command_with_arguments(command: str, arguments, connection_uri: str) -> None:
    """Runs a specified sub-command with the supplied arguments"""

    # Connect and load the session
    client = adaptor.ChadoAdaptor(connection_uri, adaptor_config_from_arguments(arguments), arguments.verbose)
    output_file = utils.open_file_write(arguments.output_file)
    writer = gff.GFFWriter(output_file)

    # Run the command
    if command == "segment":
        # Resolve a landmark
        run_segment_command(client, writer, arguments)
    elif command == "search":
        # Search features by name
        features = client.get_features_by_name(arguments.name, arguments.class_name, arguments.hierarchy)
        writer.write_features(features)
    elif command == "alias":
        # Search features by name or synonym
        features = client.get_features_by_alias(arguments.name, arguments.class_name, arguments.hierarchy)
        writer.write_features(features)
    elif command == "features":
        # List features
        features = client.features(types=arguments.types, feature_id=arguments.feature_id, seq_id=arguments.seq_id,
                                   start=arguments.start, end=arguments.end,
                                   attributes=parse_attribute_filters(arguments.attribute),
                                   hierarchy=arguments.hierarchy)
        writer.write_features(features)
    elif command == "summary":
        # Estimate feature density
        summary = client.feature_summary(arguments.seq_id, arguments.start, arguments.end, arguments.types,
                                         arguments.bins)
        if summary is not None:
            writer.write_summary(summary)
    elif command == "attributes":
        # List feature attributes
        run_attributes_command(client, output_file, arguments)
    else:
        print("Functionality '" + command + "' is not yet implemented.")
    utils.close(output_file)


def run_segment_command(client: adaptor.ChadoAdaptor, writer: gff.GFFWriter, arguments) -> None:
    """Prints the extent of a landmark"""
    landmark = client.segment(arguments.name, arguments.start, arguments.end)
    if landmark is None:
        print("Landmark '" + arguments.name + "' not found.")
        return
    writer.write_header([landmark])
    writer.write_feature(landmark)


def run_attributes_command(client: adaptor.ChadoAdaptor, output_file, arguments) -> None:
    """Prints the attributes of a feature, one value per line"""
    attributes = client.attributes(arguments.uniquename, arguments.tag)
    if arguments.tag is not None:
        attributes = {arguments.tag: attributes}
    for tag, values in sorted(attributes.items()):
        for value in values:
            output_file.write(utils.list_to_string([tag, value], "\t") + "\n")
