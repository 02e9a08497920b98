from tsreach.cli import main

raise SystemExit(main())
