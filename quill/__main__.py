from quill.cli import main

main(prog_name="quill")
