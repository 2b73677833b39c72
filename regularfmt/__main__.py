from regularfmt.cli import main

raise SystemExit(main())
