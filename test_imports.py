"""
Test script to verify all imports work correctly
"""
import sys
import traceback


def test_imports():
    """Test all critical imports"""
    print("Testing imports...")

    # Test basic imports
    print("✓ Testing basic imports...")
    import fastapi
    import uvicorn
    import pydantic
    import pydantic_settings
    print("  ✓ Basic packages imported successfully")

    # Test app imports
    print("✓ Testing app imports...")
    from examcheck.config import settings
    assert settings.api_prefix
    print("  ✓ Config imported successfully")

    from examcheck.models import UserProfile, FlatExam, DivisionedExam, ExamVerdict, BatchResult
    print("  ✓ Models imported successfully")

    from examcheck.checkers import FIELD_RULES
    assert len(FIELD_RULES) == 24
    print("  ✓ Checkers imported successfully")

    from examcheck.services import eligibility_service, batch_service, corpus_service
    print("  ✓ Services imported successfully")

    from examcheck.main import app
    schema = app.openapi()
    assert "/health" in schema["paths"]
    print(f"  ✓ OpenAPI schema generated with {len(schema['paths'])} endpoints")

    print("\n🎉 All imports successful! The app should work correctly.")


if __name__ == "__main__":
    try:
        test_imports()
    except Exception as e:
        print(f"\n❌ Import error: {e}")
        print(f"Error type: {type(e).__name__}")
        traceback.print_exc()
        sys.exit(1)
    sys.exit(0)
