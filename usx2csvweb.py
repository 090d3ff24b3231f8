#!/usr/bin/env python3
"""
Web front end for usx2csv.

Upload usx, usfm, or sfm files (or zip files containing them) and get a zip
of csv files back.

Usage:
  python3 usx2csvweb.py              # runs on http://localhost:8080
  python3 usx2csvweb.py --port 9000  # custom port

The PORT environment variable sets the default port. If WEB_UI_DIR names a
folder, it is served as a static site at / and the plain upload form moves
to /simple.

This script is public domain. You may do whatever you want with it.

"""

import io
import logging
import os
import zipfile
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser

import uvicorn
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from usx2csv import META, StructuralParseError, convertdata, csvbytes, getformat

# -------------------------------------------------------------------------- #

MAXUPLOAD = 200 << 20

ZIPNAME = "usx2csv-output.zip"

INDEXHTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>USX/USFM to CSV</title>
    <style>
      body {
        margin: 0;
        font-family: "Segoe UI", Tahoma, Geneva, Verdana, sans-serif;
        background: #f4f1ec;
        color: #1f1b16;
      }
      .wrap {
        max-width: 720px;
        margin: 48px auto;
        background: #fffaf3;
        border: 1px solid #e7dccb;
        border-radius: 16px;
        padding: 32px;
      }
      .note {
        margin-top: 12px;
        font-size: 13px;
        color: #5f5245;
      }
    </style>
  </head>
  <body>
    <div class="wrap">
      <h1>USX / USFM / SFM to CSV</h1>
      <p>Upload one or more files, or a zip containing multiple files. The server returns a zip of CSVs.</p>
      <form action="/convert" method="post" enctype="multipart/form-data">
        <input type="file" name="files" multiple />
        <div class="note">Accepted: .usx, .usfm, .sfm, or .zip</div>
        <button type="submit">Convert</button>
      </form>
    </div>
  </body>
</html>
"""

# -------------------------------------------------------------------------- #

LOG = logging.getLogger(__name__)
LOG.setLevel(logging.INFO)

app = FastAPI(title="USX/USFM to CSV", version=META["VERSION"])

# -------------------------------------------------------------------------- #


def sanitizefilename(name: str) -> str:
    """Reduce an uploaded file name to a plain base name."""
    return os.path.basename(name.replace("\\", "/")).strip()


def extractzip(name: str, data: bytes, limit: int) -> list[tuple[str, bytes]]:
    """Get the files inside a zip upload, up to limit bytes uncompressed."""
    files = []
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zfile:
            infos = [
                _
                for _ in zfile.infolist()
                if not _.is_dir() and sanitizefilename(_.filename)
            ]
            if sum(_.file_size for _ in infos) > limit:
                raise HTTPException(status_code=413, detail="Upload too large")
            for info in infos:
                files.append((sanitizefilename(info.filename), zfile.read(info)))
    except (zipfile.BadZipFile, OSError) as err:
        LOG.error("Failed to open zip %s: %s", name, err)
        raise HTTPException(status_code=400, detail=f"Failed to open zip: {name}") from err
    return files


def resolvestaticdir() -> str | None:
    """Get the static site folder from WEB_UI_DIR, if there is one."""
    staticdir = os.environ.get("WEB_UI_DIR", "")
    return staticdir if staticdir and os.path.isdir(staticdir) else None


STATICDIR = resolvestaticdir()

# -------------------------------------------------------------------------- #


@app.get("/simple", response_class=HTMLResponse)
def simpleindex() -> str:
    """Plain upload form."""
    return INDEXHTML


if STATICDIR is None:
    app.add_api_route("/", simpleindex, methods=["GET"], response_class=HTMLResponse)


@app.post("/convert")
async def convert(files: list[UploadFile] | None = File(None)) -> StreamingResponse:
    """Convert uploaded files and return a zip of csv files."""
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    inputs: list[tuple[str, bytes]] = []
    total = 0
    for upload in files:
        name = sanitizefilename(upload.filename or "")
        if not name:
            continue
        data = await upload.read()
        total += len(data)
        if total > MAXUPLOAD:
            raise HTTPException(status_code=413, detail="Upload too large")
        if name.lower().endswith(".zip"):
            entries = extractzip(name, data, MAXUPLOAD - total + len(data))
            total += sum(len(_[1]) for _ in entries) - len(data)
            inputs.extend(entries)
        else:
            inputs.append((name, data))

    inputs = [_ for _ in inputs if getformat(_[0]) is not None]
    if not inputs:
        raise HTTPException(
            status_code=400, detail="No .usx, .usfm, or .sfm files found in upload"
        )

    # later files replace earlier files with the same output name
    outputs: dict[str, bytes] = {}
    for name, data in inputs:
        LOG.info("Processing %s", name)
        try:
            rows = convertdata(name, data)
        except StructuralParseError as err:
            LOG.error("ERROR: %s", err)
            raise HTTPException(status_code=422, detail=str(err)) from err
        outputs[f"{os.path.splitext(name)[0]}.csv"] = csvbytes(rows)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zfile:
        for name in sorted(outputs):
            zfile.writestr(name, outputs[name])

    return StreamingResponse(
        iter([buf.getvalue()]),
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={ZIPNAME}"},
    )


# Static files must be mounted last so the routes above take priority
if STATICDIR is not None:
    app.mount("/", StaticFiles(directory=STATICDIR, html=True), name="static")

# -------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> None:
    """Run the web server."""
    parser = ArgumentParser(
        formatter_class=ArgumentDefaultsHelpFormatter,
        description="""
            web front end for converting USX, USFM, and SFM bibles to CSV.
        """,
        epilog=f"""
            * Version: {META["VERSION"]} * {META["DATE"]} * This script is public domain. *
        """,
    )
    parser.add_argument(
        "--port", type=int, default=int(os.environ.get("PORT", "8080")), help="port to listen on"
    )
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")  # nosec
    args = parser.parse_args(argv)

    LOG.info("Listening on http://localhost:%s", args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
