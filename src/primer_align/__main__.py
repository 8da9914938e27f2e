from primer_align.scripts.analyze_primers import main


if __name__ == '__main__':
    raise SystemExit(main())
