#!/usr/bin/env python3
"""
Startup script for the Exam Eligibility Engine
"""
import subprocess
import sys
from pathlib import Path

def create_env_file():
    """Create .env file if it doesn't exist"""
    env_path = Path(".env")
    if not env_path.exists():
        print("📝 Creating .env file...")

        env_content = """# Application Configuration
APP_NAME=Exam Eligibility Engine
APP_VERSION=1.0.0
DEBUG=true
LOG_LEVEL=INFO

# API Configuration
API_PREFIX=/api/v1
CORS_ORIGINS=http://localhost:3000,http://localhost:8080

# Exam corpus
EXAM_DATA_DIR=data/exams
BATCH_MAX_WORKERS=1
"""

        with open(env_path, 'w') as f:
            f.write(env_content)

        print("✅ .env file created successfully!")
    else:
        print("✅ .env file already exists")

def check_dependencies():
    """Check if required dependencies are installed"""
    print("🔍 Checking dependencies...")

    try:
        import fastapi
        import uvicorn
        import pydantic
        import pydantic_settings
        print("✅ All Python dependencies are installed")
        return True
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("📦 Please install dependencies using: pip install -e .[test]")
        return False

def check_exam_data():
    """Report how many exam files are available"""
    data_dir = Path("data/exams")
    if not data_dir.exists():
        print(f"⚠️  Exam data directory not found: {data_dir}")
        return False

    count = len(list(data_dir.rglob("*.json")))
    print(f"✅ Found {count} exam files in {data_dir}")
    return count > 0

def run_tests():
    """Run the test suite"""
    print("🧪 Running tests...")

    try:
        result = subprocess.run([sys.executable, '-m', 'pytest', '-q'], capture_output=True, text=True)
        if result.returncode == 0:
            print("✅ Tests passed successfully")
            return True
        else:
            print(f"❌ Tests failed: {result.stdout[-2000:]}{result.stderr}")
            return False
    except Exception as e:
        print(f"❌ Failed to run tests: {e}")
        return False

def start_application():
    """Start the FastAPI application"""
    print("🚀 Starting the application...")

    try:
        subprocess.run([
            sys.executable, '-m', 'uvicorn',
            'examcheck.main:app',
            '--host', '0.0.0.0',
            '--port', '8000',
            '--reload'
        ])
    except KeyboardInterrupt:
        print("\n👋 Application stopped by user")
    except Exception as e:
        print(f"❌ Failed to start application: {e}")

def main():
    """Main startup function"""
    print("🎓 Exam Eligibility Engine")
    print("=" * 50)

    # Check if we're in the right directory
    if not Path("examcheck").exists():
        print("❌ Please run this script from the project root directory")
        sys.exit(1)

    # Create .env file
    create_env_file()

    # Check dependencies
    if not check_dependencies():
        print("\n📦 Please install dependencies first:")
        print("   pip install -e .[test]")
        sys.exit(1)

    if not check_exam_data():
        print("\n⚠️  No exam data found. Scans will only work with exams sent in the request.")

    # Run tests
    if not run_tests():
        print("\n⚠️  Some tests failed. The application may not work correctly.")

    print("\n🎯 System is ready!")
    print("\n📚 Next steps:")
    print("1. Add exam JSON files under data/exams")
    print("2. Visit http://localhost:8000/docs for API documentation")
    print("3. Check a single exam with POST /api/v1/eligibility/exam")
    print("4. Scan every exam with POST /api/v1/eligibility/scan")

    # Ask if user wants to start the application
    response = input("\n🚀 Start the application now? (y/n): ").lower().strip()
    if response in ['y', 'yes']:
        start_application()
    else:
        print("\n💡 To start the application later, run:")
        print("   uvicorn examcheck.main:app --reload")

if __name__ == "__main__":
    main()
