from asciidoctor_chunker.cli import main

raise SystemExit(main())
