from cfswitch.commands import app


def main() -> None:
    app(prog_name="cf-switch")


if __name__ == "__main__":
    main()
