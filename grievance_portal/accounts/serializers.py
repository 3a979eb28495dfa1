from django.contrib.auth import get_user_model
from rest_framework import serializers

from complaints.models import Complaint

User = get_user_model()


class RegistrationSerializer(serializers.Serializer):
    username = serializers.CharField(
        min_length=3,
        max_length=150,
        error_messages={"min_length": "Username must be at least 3 characters"},
    )
    password = serializers.CharField(
        min_length=6,
        write_only=True,
        error_messages={"min_length": "Password must be at least 6 characters"},
    )
    name = serializers.CharField(
        min_length=2,
        max_length=150,
        error_messages={"min_length": "Name must be at least 2 characters"},
    )
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    phone = serializers.CharField(
        min_length=10,
        max_length=20,
        error_messages={"min_length": "Phone number must be at least 10 digits"},
    )
    address = serializers.CharField(
        min_length=5,
        max_length=255,
        error_messages={"min_length": "Address must be at least 5 characters"},
    )
    role = serializers.ChoiceField(choices=User.Role.choices, default=User.Role.CITIZEN)
    department = serializers.ChoiceField(
        choices=Complaint.Category.choices,
        required=False,
        allow_null=True,
    )

    def validate_username(self, value):
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username already exists")
        return value

    def validate(self, attrs):
        if attrs["role"] == User.Role.OFFICER:
            if not attrs.get("department"):
                raise serializers.ValidationError({"department": "Please select a department"})
        else:
            attrs["department"] = None
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(error_messages={"blank": "Username is required"})
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages={"blank": "Password is required"},
    )


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "name", "email", "phone", "address", "role", "department"]
        read_only_fields = fields
