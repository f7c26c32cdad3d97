import sys

from authaudit.ir.errors import GraphLoadError
from authaudit.loader import load_supergraph
from authaudit.pipeline.controller import AuditController


def main(argv) -> int:
    if len(argv) < 2:
        print("supergraph not specified")
        return 1

    try:
        graph = load_supergraph(argv[1])
    except GraphLoadError as e:
        print(f"ERROR: {e}")
        return 1

    report = AuditController().run(graph)
    for line in report.to_lines():
        print(line)

    return 0 if report.is_secure else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
