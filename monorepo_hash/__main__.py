import sys

from monorepo_hash.cli.hash_cli import main as cli_main


def main():
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
