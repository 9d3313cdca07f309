from s3upload.cli import main

raise SystemExit(main())
