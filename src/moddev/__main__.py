from moddev.cli import main

raise SystemExit(main())
