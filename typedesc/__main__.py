from typedesc.compiler.cli import main

raise SystemExit(main())
