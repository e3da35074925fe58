from pq_utils.main import app

if __name__ == "__main__":
    app(prog_name="pq-utils")
