import os
import traceback

from flask import Flask, jsonify, request, send_file, url_for
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.utils import secure_filename

from File_Compression import HUFF_SUFFIX, MAGIC, FileError, compress_file, decompress_file
from huffman import FormatError

# -----------------------------------------------------------
# PATH CONFIGURATION
# -----------------------------------------------------------
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
DATA_DIR = os.environ.get("HUFF_DATA_DIR", os.path.join(BASE_DIR, "data"))
MAX_UPLOAD_MB = int(os.environ.get("HUFF_MAX_UPLOAD_MB", "64"))

# -----------------------------------------------------------
# FLASK APP SETUP
# -----------------------------------------------------------
app = Flask(__name__)
app.config["DATA_DIR"] = DATA_DIR
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024
CORS(app)

# -----------------------------------------------------------
# HELPER FUNCTIONS
# -----------------------------------------------------------
def data_dir():
    path = app.config["DATA_DIR"]
    os.makedirs(path, exist_ok=True)
    return path


def save_upload(file):
    """Stores an uploaded file under DATA_DIR and returns (filename, path)."""
    filename = secure_filename(file.filename or "")
    if not filename:
        return None, None
    path = os.path.join(data_dir(), filename)
    file.save(path)
    return filename, path

# -----------------------------------------------------------
# ERROR HANDLERS
# -----------------------------------------------------------
@app.errorhandler(413)
def upload_too_large(e):
    return jsonify({"success": False, "error": "File too large"}), 413

# -----------------------------------------------------------
# ROUTES
# -----------------------------------------------------------
@app.route("/")
def home():
    return jsonify({
        "service": "huff",
        "magic": MAGIC.hex(),
        "suffix": HUFF_SUFFIX,
    })


@app.route("/compress_file", methods=["POST"])
def compress_file_route():
    try:
        file = request.files.get("file")
        if not file:
            return jsonify({"success": False, "error": "No file uploaded"}), 400

        filename, input_path = save_upload(file)
        if not filename:
            return jsonify({"success": False, "error": "Invalid file name"}), 400

        compressed_filename = f"{filename}{HUFF_SUFFIX}"
        compressed_path = compress_file(input_path, os.path.join(data_dir(), compressed_filename))

        original_size = os.path.getsize(input_path)
        compressed_size = os.path.getsize(compressed_path)
        saved = original_size - compressed_size
        saved_percent = round(saved / original_size * 100, 2) if original_size else 0

        return jsonify({
            "success": True,
            "filename": filename,
            "compressed_filename": compressed_filename,
            "original_size": original_size,
            "compressed_size": compressed_size,
            "saved": saved,
            "saved_percent": saved_percent,
            "download_url": url_for("download_file", filename=compressed_filename),
        })

    except FileError as e:
        print("File error in /compress_file:", e)
        return jsonify({"success": False, "error": "File Error"}), 500
    except HTTPException:
        raise
    except Exception as e:
        print("Error in /compress_file:", e)
        traceback.print_exc()
        return jsonify({"success": False, "error": "Internal server error"}), 500


@app.route("/decompress_file", methods=["POST"])
def decompress_file_route():
    try:
        file = request.files.get("file")
        if not file:
            return jsonify({"success": False, "error": "No file uploaded"}), 400

        filename = secure_filename(file.filename or "")
        if not filename.endswith(HUFF_SUFFIX) or len(filename) <= len(HUFF_SUFFIX):
            return jsonify({"success": False, "error": "Invalid file type"}), 400

        _, input_path = save_upload(file)
        output_filename = filename[:-len(HUFF_SUFFIX)]
        decompress_file(input_path, os.path.join(data_dir(), output_filename))

        return jsonify({
            "success": True,
            "original_huff": filename,
            "decompressed_file": output_filename,
            "download_url": url_for("download_file", filename=output_filename),
        })

    except FormatError as e:
        print("Rejected upload in /decompress_file:", e)
        return jsonify({"success": False, "error": "File Error"}), 400
    except FileError as e:
        print("File error in /decompress_file:", e)
        return jsonify({"success": False, "error": "File Error"}), 500
    except HTTPException:
        raise
    except Exception as e:
        print("Error in /decompress_file:", e)
        traceback.print_exc()
        return jsonify({"success": False, "error": "Internal server error"}), 500


@app.route("/download/<filename>")
def download_file(filename):
    file_path = os.path.join(data_dir(), secure_filename(filename))
    if not os.path.isfile(file_path):
        return "File not found", 404
    return send_file(file_path, as_attachment=True, download_name=os.path.basename(file_path),
                     mimetype="application/octet-stream")


# -----------------------------------------------------------
if __name__ == "__main__":
    app.run(debug=True)
