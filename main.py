from loguru import logger

from semantic_model.cli import app


def main() -> None:
    logger.debug("semantic-model started")
    app()


if __name__ == "__main__":
    main()
