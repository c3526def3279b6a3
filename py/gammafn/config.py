"""This module defines the Config class.
This class is responsible for managing the options selected for the user and
contains the default configuration of the accuracy checks.
"""
from importlib import metadata
from configparser import ConfigParser
import logging
import os
from datetime import datetime
import git
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from gammafn.errors import ConfigError
from gammafn.utils import (ACCEPTED_FUNCTIONS, ACCEPTED_SPACINGS,
                           parse_logging_level, setup_logger)

try:
    THIS_DIR = os.path.dirname(os.path.abspath(__file__))
    GAMMAFN_BASE = THIS_DIR.split("py/gammafn")[0]
    git_hash = git.Repo(GAMMAFN_BASE).head.object.hexsha
except (InvalidGitRepositoryError, NoSuchPathError):  # pragma: no cover
    try:
        git_hash = metadata.metadata('gammafn')['Summary'].split(':')[-1]
    except metadata.PackageNotFoundError:
        git_hash = "unknown"

accepted_general_options = [
    "overwrite", "logging level console", "logging level file", "log",
    "out dir"
]
accepted_accuracy_options = [
    "functions", "x min", "x max", "num points", "spacing",
    "relative tolerance", "absolute tolerance"
]

default_config = {
    "general": {
        "overwrite": False,
        # New logging level defined in setup_logger.
        # Numeric value is PROGRESS_LEVEL_NUM defined in utils.py
        "log": "run.log",
        "logging level console": "PROGRESS",
        "logging level file": "PROGRESS",
    },
    "accuracy": {
        "functions": "gamma lgamma digamma",
        "x min": 0.01,
        "x max": 171.6,
        "num points": 1000,
        "spacing": "log",
        "relative tolerance": 1e-10,
        "absolute tolerance": 1e-12,
    },
    "run specs": {
        "git hash": git_hash,
        "timestamp": str(datetime.now()),
    }
}


class Config:
    """Class to manage the configuration file

    Methods
    -------
    __init__
    __format_accuracy_section
    __format_general_section
    __parse_environ_variables
    initialize_folders
    write_config

    Attributes
    ---------
    absolute_tolerance: float
    Absolute tolerance of the comparison against the reference values

    config: ConfigParser
    A ConfigParser instance with the user configuration

    functions: list of str
    Names of the kernels to check

    log: str or None
    Name of the log file. None for no log file

    logger: logging.Logger
    Logger object

    logging_level_console: str
    Level of console logging. Messages with lower priorities will not be logged.
    Accepted values are (in order of priority) NOTSET, DEBUG, PROGRESS, INFO,
    WARNING, WARNING_OK, ERROR, CRITICAL.

    logging_level_file: str
    Level of file logging. Messages with lower priorities will not be logged.
    Accepted values are (in order of priority) NOTSET, DEBUG, PROGRESS, INFO,
    WARNING, WARNING_OK, ERROR, CRITICAL.

    num_points: int
    Number of points in the grid of arguments

    out_dir: str
    Name of the directory where the results will be saved

    overwrite: bool
    If True, overwrite a previous run in the saved in the same output
    directory. Does not have any effect if the folder `out_dir` does not
    exist.

    relative_tolerance: float
    Relative tolerance of the comparison against the reference values

    spacing: str
    "lin" or "log", spacing of the grid of arguments

    x_max: float
    Last point of the grid of arguments

    x_min: float
    First point of the grid of arguments
    """

    def __init__(self, filename):
        """Initializes class instance

        Arguments
        ---------
        filename: str
        Name of the config file

        Raise
        -----
        ConfigError if the config file is not correct
        """
        self.logger = logging.getLogger(__name__)

        self.config = ConfigParser()
        # with this we allow options to use capital letters
        self.config.optionxform = lambda option: option
        # load default configuration
        self.config.read_dict(default_config)
        # now read the configuration file
        if os.path.isfile(filename):
            self.config.read(filename)
        else:
            raise ConfigError(f"Config file not found: {filename}")

        # parse the environ variables
        self.__parse_environ_variables()

        # format the sections
        self.overwrite = None
        self.log = None
        self.logging_level_console = None
        self.logging_level_file = None
        self.out_dir = None
        self.__format_general_section()
        self.functions = None
        self.x_min = None
        self.x_max = None
        self.num_points = None
        self.spacing = None
        self.relative_tolerance = None
        self.absolute_tolerance = None
        self.__format_accuracy_section()

        # initialize folders where data will be saved
        self.initialize_folders()

        # setup logger
        setup_logger(logging_level_console=self.logging_level_console,
                     log_file=self.log,
                     logging_level_file=self.logging_level_file)

    def __format_accuracy_section(self):
        """Format the accuracy section of the parser into usable data

        Raise
        -----
        ConfigError if the config file is not correct
        """
        # this should never be true as the accuracy section is loaded in the
        # default dictionary
        if "accuracy" not in self.config:  # pragma: no cover
            raise ConfigError("Missing section [accuracy]")
        section = self.config["accuracy"]

        # check that arguments are valid
        for key in section.keys():
            if key not in accepted_accuracy_options:
                raise ConfigError("Unrecognised option in section [accuracy]. "
                                  f"Found: '{key}'. Accepted options are "
                                  f"{accepted_accuracy_options}")

        self.functions = section.get("functions").split()
        if len(self.functions) == 0:
            raise ConfigError(
                "In section [accuracy], variable 'functions' must contain "
                "at least one function")
        for function_name in self.functions:
            if function_name not in ACCEPTED_FUNCTIONS:
                raise ConfigError(
                    "In section [accuracy], unrecognised function "
                    f"'{function_name}'. Accepted functions are "
                    f"{sorted(ACCEPTED_FUNCTIONS)}")

        try:
            self.x_min = section.getfloat("x min")
            self.x_max = section.getfloat("x max")
            self.num_points = section.getint("num points")
            self.relative_tolerance = section.getfloat("relative tolerance")
            self.absolute_tolerance = section.getfloat("absolute tolerance")
        except ValueError as error:
            raise ConfigError(
                f"In section [accuracy], invalid numeric value: {error}"
            ) from error

        if self.x_min >= self.x_max:
            raise ConfigError(
                "In section [accuracy], variable 'x min' must be smaller "
                f"than 'x max'. Found: x min = {self.x_min}, "
                f"x max = {self.x_max}")
        if self.num_points < 2:
            raise ConfigError(
                "In section [accuracy], variable 'num points' must be at "
                f"least 2. Found: {self.num_points}")
        if self.relative_tolerance < 0 or self.absolute_tolerance < 0:
            raise ConfigError(
                "In section [accuracy], tolerances must be non-negative")

        self.spacing = section.get("spacing")
        if self.spacing not in ACCEPTED_SPACINGS:
            raise ConfigError(
                "In section [accuracy], variable 'spacing' must be one of "
                f"{ACCEPTED_SPACINGS}. Found: '{self.spacing}'")
        if self.spacing == "log" and self.x_min <= 0:
            raise ConfigError(
                "In section [accuracy], 'spacing = log' requires a positive "
                f"'x min'. Found: {self.x_min}")

    def __format_general_section(self):
        """Format the general section of the parser into usable data

        Raise
        -----
        ConfigError if the config file is not correct
        """
        # this should never be true as the general section is loaded in the
        # default dictionary
        if "general" not in self.config:  # pragma: no cover
            raise ConfigError("Missing section [general]")
        section = self.config["general"]

        # check that arguments are valid
        for key in section.keys():
            if key not in accepted_general_options:
                raise ConfigError("Unrecognised option in section [general]. "
                                  f"Found: '{key}'. Accepted options are "
                                  f"{accepted_general_options}")

        self.out_dir = section.get("out dir")
        if self.out_dir is None:
            raise ConfigError("Missing variable 'out dir' in section [general]")
        if not self.out_dir.endswith("/"):
            self.out_dir += "/"

        self.overwrite = section.getboolean("overwrite")

        self.log = section.get("log")
        if "/" in self.log:
            raise ConfigError(
                "Variable 'log' in section [general] should not incude folders. "
                f"Found: {self.log}")
        self.log = self.out_dir + "Log/" + self.log
        section["log"] = self.log

        self.logging_level_console = section.get(
            "logging level console").upper()
        self.logging_level_file = section.get("logging level file").upper()
        for key, value in [("logging level console", self.logging_level_console),
                           ("logging level file", self.logging_level_file)]:
            try:
                parse_logging_level(value)
            except AttributeError as error:
                raise ConfigError(
                    f"In section [general], invalid value for '{key}'. "
                    f"Found: '{value}'") from error

    def __parse_environ_variables(self):
        """Read all variables and replaces the enviroment variables for their
        actual values. This assumes that enviroment variables are only used
        at the beggining of the paths.

        Raise
        -----
        ConfigError if an environ variable was not defined
        """
        for section in self.config:
            for key, value in self.config[section].items():
                if value.startswith("$"):
                    pos = value.find("/")
                    if pos == -1:
                        pos = len(value)
                    if os.getenv(value[1:pos]) is None:
                        raise ConfigError(
                            f"In section [{section}], undefined "
                            f"environment variable {value[1:pos]} "
                            "was found")
                    self.config[section][key] = value.replace(
                        value[:pos], os.getenv(value[1:pos]))

    def initialize_folders(self):
        """Initialize output folders

        Raise
        -----
        ConfigError if the output path was already used and the
        overwrite is not selected
        """
        if not os.path.exists(f"{self.out_dir}/.config.ini"):
            os.makedirs(self.out_dir, exist_ok=True)
            os.makedirs(self.out_dir + "Log/", exist_ok=True)
            self.write_config()
        elif self.overwrite:
            os.makedirs(self.out_dir + "Log/", exist_ok=True)
            self.write_config()
        else:
            raise ConfigError("Specified folder contains a previous run. "
                              "Pass overwrite option in configuration file "
                              "in order to ignore the previous run or "
                              "change the output path variable to point "
                              f"elsewhere. Folder: {self.out_dir}")

    def write_config(self):
        """This function writes the configuration options for later
        usages. The file is saved under the name .config.ini and in
        the self.out_dir folder
        """
        outname = f"{self.out_dir}/.config.ini"
        if os.path.exists(outname):
            newname = f"{outname}.{os.path.getmtime(outname)}"
            os.rename(outname, newname)
        with open(outname, 'w', encoding="utf-8") as config_file:
            self.config.write(config_file)
