import os
import importlib.resources
import getpass
import sqlalchemy.engine
import sqlalchemy_utils
from . import utils

# Environment variables overriding the default connection parameters
environment_variables = {
    "host": "CHADO_HOST",
    "port": "CHADO_PORT",
    "user": "CHADO_USER",
    "password": "CHADO_PASS"
}


def get_connection_parameters(filename: str, use_password: bool, dbname: str) -> dict:
    """Reads database connection parameters from a configuration file or the environment"""
    if filename:
        connection_parameters = utils.parse_yaml(filename)
    else:
        connection_parameters = get_connection_parameters_from_env()
        if use_password:
            connection_parameters["password"] = get_connection_password()
    connection_parameters["database"] = dbname
    return connection_parameters


def get_connection_parameters_from_env() -> dict:
    """Reads connection parameters from environment variables, falling back to the packaged defaults"""
    defaults = utils.parse_yaml(default_configuration_file())
    return {key: os.getenv(variable, defaults.get(key)) for key, variable in environment_variables.items()}


def get_connection_password() -> str:
    """Asks the user to supply the connection password"""
    return getpass.getpass()


def generate_uri(connection_details: dict) -> str:
    """Creates a PostgreSQL connection URI; empty parameters are left out"""
    def parameter(key):
        return connection_details.get(key) or None

    port = parameter("port")
    url = sqlalchemy.engine.URL.create("postgresql", username=parameter("user"), password=parameter("password"),
                                       host=parameter("host"), port=int(port) if port else None,
                                       database=parameter("database"))
    return url.render_as_string(hide_password=False)


def resource_filename(relative_path: str) -> str:
    """Returns the path of a file shipped with the package"""
    return str(importlib.resources.files("chadodas").joinpath(relative_path))


def default_configuration_file() -> str:
    return resource_filename("data/defaultDatabase.yml")


def default_adaptor_file() -> str:
    return resource_filename("data/defaultAdaptor.yml")


def exists(uri: str) -> bool:
    """Checks if a database exists"""
    return sqlalchemy_utils.database_exists(uri)
