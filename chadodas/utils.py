import sys
import os
import yaml


class EmptyObject:
    """Helper class that creates objects with attributes supplied by keyword arguments"""
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)


class VerbosePrinter:
    """Class printing diagnostic messages if verbose argument is set"""

    def __init__(self, verbose: bool, separator=";", stream=None):
        """Constructor"""
        self.verbose = verbose
        self.separator = separator
        self.stream = stream

    def print(self, message):
        """Prints a message if set to verbose. If the message is a list, the method prints all elements,
        separated by the set separator"""
        if self.verbose:
            stream = self.stream or sys.stderr
            if isinstance(message, list):
                print(*message, sep=self.separator, file=stream)
            else:
                print(message, file=stream)


def open_file_read(filename: str):
    """Function opening a text file for read access"""
    if not filename:
        # Read from stdin
        f = sys.stdin
    else:
        # Check if file exists
        filepath = os.path.abspath(filename)
        if not os.path.exists(filepath):
            raise FileNotFoundError("File '" + filepath + "' does not exist.")
        f = open(filename, "r")
    return f


def open_file_write(filename: str):
    """Function opening a text file for write access"""
    if not filename:
        # Write to stdout
        f = sys.stdout
    else:
        # Check if path exists
        filepath = os.path.abspath(os.path.dirname(filename))
        if not os.path.exists(filepath):
            raise FileNotFoundError("Directory '" + filepath + "' does not exist.")
        f = open(filename, "w")
    return f


def close(file):
    """Function closing a text file"""
    if file not in [sys.stdin, sys.stdout, sys.stderr]:
        file.close()


def read_text(filename: str) -> str:
    """Function reading text from a file"""
    file = open_file_read(filename)
    content = file.read()
    close(file)
    return content


def parse_yaml(filename: str) -> dict:
    """Function parsing a YAML file into a dictionary of stripped strings"""
    stream = open_file_read(filename)
    data = yaml.load(stream, Loader=yaml.BaseLoader) or {}
    for key, value in data.items():
        if value is not None:
            data[key] = str(value).strip()
    close(stream)
    return data


def parse_string(the_string: str):
    """Converts a string to an integer/float/boolean, if applicable"""
    if is_string_integer(the_string):
        return int(the_string)
    elif is_string_float(the_string):
        return float(the_string)
    elif the_string.lower() in ["true", "yes", "on"]:
        return True
    elif the_string.lower() in ["false", "no", "off"]:
        return False
    else:
        return the_string


def is_string_integer(the_string: str) -> bool:
    """Tests whether a string can be represented as integer number"""
    try:
        int(the_string)
        return True
    except ValueError:
        return False


def is_string_float(the_string: str) -> bool:
    """Tests whether a string can be represented as floating-point number"""
    try:
        float(the_string)
        return True
    except ValueError:
        return False


def list_to_string(the_list: list, delimiter: str) -> str:
    """Function concatenating all elements of a list"""
    the_string = []
    for element in the_list:
        if isinstance(element, str):
            the_string.append(element)
        elif element is None:
            the_string.append("")
        else:
            the_string.append(str(element))
    return delimiter.join(the_string)
