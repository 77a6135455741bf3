from importlib.metadata import version, PackageNotFoundError

try:
    APP_VERSION = version("concavehull-editor")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"
