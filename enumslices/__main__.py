from enumslices.compiler.cli import main

raise SystemExit(main())
