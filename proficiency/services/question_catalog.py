"""Built-in question catalogue: one 15-question round per language track.

Loaded into the in-memory bank at startup, and into PostgreSQL by
``scripts/seed_questions.py``.  Each call to ``build_catalog`` mints fresh
question ids, as a reload does.
"""

from __future__ import annotations

from proficiency.models.question import Question

_PYTHON = [
    dict(kind="mcq", topic="Variables", difficulty="easy",
         prompt="Which of the following is the correct way to declare a variable in Python?",
         options=("int x = 5", "x = 5", "var x = 5", "declare x = 5"),
         correct_answer="x = 5",
         explanation="Python uses dynamic typing, no need to specify type"),
    dict(kind="code_output", topic="Data Types", difficulty="easy",
         prompt="What is the output of this code?",
         code_snippet='x = "Hello"\ny = "World"\nprint(x + y)',
         options=("Hello World", "HelloWorld", "Error", "Hello+World"),
         correct_answer="HelloWorld",
         explanation="String concatenation without space"),
    dict(kind="mcq", topic="Lists", difficulty="easy",
         prompt="How do you create an empty list in Python?",
         options=("list = ()", "list = []", "list = {}", "list = empty()"),
         correct_answer="list = []",
         explanation="Square brackets create a list"),
    dict(kind="code_output", topic="Loops", difficulty="medium",
         prompt="What is the output?",
         code_snippet='for i in range(3):\n    print(i, end="")',
         options=("123", "012", "0123", "12"),
         correct_answer="012",
         explanation="range(3) generates 0, 1, 2"),
    dict(kind="mcq", topic="Functions", difficulty="easy",
         prompt="Which keyword is used to define a function in Python?",
         options=("function", "def", "func", "define"),
         correct_answer="def",
         explanation="def is used to define functions in Python"),
    dict(kind="code_output", topic="Conditionals", difficulty="medium",
         prompt="What will be printed?",
         code_snippet='x = 10\nif x > 5:\n    print("A")\nelif x > 15:\n    print("B")\nelse:\n    print("C")',
         options=("A", "B", "C", "AB"),
         correct_answer="A",
         explanation="First condition is true, so A is printed"),
    dict(kind="mcq", topic="Data Types", difficulty="easy",
         prompt="Which data type is mutable in Python?",
         options=("tuple", "string", "list", "integer"),
         correct_answer="list",
         explanation="Lists can be modified after creation"),
    dict(kind="code_output", topic="Strings", difficulty="medium",
         prompt="What is the output?",
         code_snippet='text = "Python"\nprint(text[1:4])',
         options=("Pyt", "yth", "ytho", "Pyth"),
         correct_answer="yth",
         explanation="Slicing from index 1 to 3 (4 is exclusive)"),
    dict(kind="mcq", topic="Operators", difficulty="easy",
         prompt="What does the // operator do in Python?",
         options=("Regular division", "Floor division", "Modulo", "Exponentiation"),
         correct_answer="Floor division",
         explanation="// performs integer division"),
    dict(kind="code_output", topic="Lists", difficulty="medium",
         prompt="What will be the output?",
         code_snippet="nums = [1, 2, 3]\nnums.append(4)\nprint(len(nums))",
         options=("3", "4", "5", "Error"),
         correct_answer="4",
         explanation="append adds one element, making length 4"),
    dict(kind="mcq", topic="Dictionaries", difficulty="medium",
         prompt='How do you access the value associated with key "name" in dictionary d?',
         options=("d.name", 'd["name"]', "d(name)", "d->name"),
         correct_answer='d["name"]',
         explanation="Square bracket notation for dictionary access"),
    dict(kind="code_output", topic="Functions", difficulty="hard",
         prompt="What is printed?",
         code_snippet="def func(x, y=5):\n    return x + y\nprint(func(3))",
         options=("8", "3", "5", "Error"),
         correct_answer="8",
         explanation="y defaults to 5, so 3 + 5 = 8"),
    dict(kind="mcq", topic="Loops", difficulty="medium",
         prompt="Which statement is used to exit a loop prematurely?",
         options=("exit", "break", "stop", "return"),
         correct_answer="break",
         explanation="break exits the current loop"),
    dict(kind="code_output", topic="Boolean", difficulty="medium",
         prompt="What is the output?",
         code_snippet="print(bool(0))",
         options=("True", "False", "0", "Error"),
         correct_answer="False",
         explanation="0 is considered False in Python"),
    dict(kind="mcq", topic="OOP", difficulty="hard",
         prompt="Which method is automatically called when an object is created?",
         options=("__init__", "__new__", "__create__", "__start__"),
         correct_answer="__init__",
         explanation="__init__ is the constructor method"),
]

_JAVA = [
    dict(kind="mcq", topic="Variables", difficulty="easy",
         prompt="Which keyword is used to declare a constant in Java?",
         options=("const", "final", "constant", "static"),
         correct_answer="final",
         explanation="final keyword makes a variable constant"),
    dict(kind="code_output", topic="Data Types", difficulty="easy",
         prompt="What is the output?",
         code_snippet="int x = 5;\nint y = 2;\nSystem.out.println(x / y);",
         options=("2.5", "2", "3", "Error"),
         correct_answer="2",
         explanation="Integer division truncates the decimal"),
    dict(kind="mcq", topic="Arrays", difficulty="easy",
         prompt="How do you declare an integer array of size 5 in Java?",
         options=("int arr[5]", "int[] arr = new int[5]", "array int[5]", "int arr = new array[5]"),
         correct_answer="int[] arr = new int[5]",
         explanation="Standard array declaration syntax"),
    dict(kind="code_output", topic="Strings", difficulty="medium",
         prompt="What is printed?",
         code_snippet='String s = "Hello";\nSystem.out.println(s.length());',
         options=("4", "5", "6", "Error"),
         correct_answer="5",
         explanation="Hello has 5 characters"),
    dict(kind="mcq", topic="OOP", difficulty="easy",
         prompt="What is the correct way to create an object in Java?",
         options=("ClassName obj = new ClassName()", "new ClassName obj", "ClassName obj", "create ClassName obj"),
         correct_answer="ClassName obj = new ClassName()",
         explanation="Standard object instantiation syntax"),
    dict(kind="code_output", topic="Loops", difficulty="medium",
         prompt="What is the output?",
         code_snippet="for(int i = 0; i < 3; i++) {\n    System.out.print(i);\n}",
         options=("123", "012", "0123", "12"),
         correct_answer="012",
         explanation="Loop runs from 0 to 2"),
    dict(kind="mcq", topic="Access Modifiers", difficulty="medium",
         prompt="Which access modifier makes a member accessible only within its own class?",
         options=("public", "private", "protected", "default"),
         correct_answer="private",
         explanation="private restricts access to the class"),
    dict(kind="code_output", topic="Conditionals", difficulty="medium",
         prompt="What will be printed?",
         code_snippet='int x = 10;\nif(x > 5 && x < 15) {\n    System.out.println("Yes");\n} else {\n    System.out.println("No");\n}',
         options=("Yes", "No", "Both", "Error"),
         correct_answer="Yes",
         explanation="10 is greater than 5 and less than 15"),
    dict(kind="mcq", topic="Inheritance", difficulty="medium",
         prompt="Which keyword is used to inherit a class in Java?",
         options=("inherits", "extends", "implements", "derives"),
         correct_answer="extends",
         explanation="extends is used for class inheritance"),
    dict(kind="code_output", topic="Arrays", difficulty="medium",
         prompt="What is the output?",
         code_snippet="int[] arr = {1, 2, 3};\nSystem.out.println(arr.length);",
         options=("2", "3", "4", "Error"),
         correct_answer="3",
         explanation="Array has 3 elements"),
    dict(kind="mcq", topic="Exceptions", difficulty="hard",
         prompt="Which block is used to handle exceptions in Java?",
         options=("catch", "handle", "exception", "error"),
         correct_answer="catch",
         explanation="catch block handles exceptions"),
    dict(kind="code_output", topic="Strings", difficulty="hard",
         prompt="What is printed?",
         code_snippet='String s1 = "Java";\nString s2 = "Java";\nSystem.out.println(s1 == s2);',
         options=("true", "false", "1", "Error"),
         correct_answer="true",
         explanation="String literals are stored in string pool"),
    dict(kind="mcq", topic="Static", difficulty="medium",
         prompt="What does the static keyword mean?",
         options=("Variable cannot change", "Belongs to the class, not instance", "Private access", "Final value"),
         correct_answer="Belongs to the class, not instance",
         explanation="static members belong to the class"),
    dict(kind="code_output", topic="Operators", difficulty="medium",
         prompt="What is the output?",
         code_snippet="int x = 5;\nSystem.out.println(++x);",
         options=("5", "6", "7", "Error"),
         correct_answer="6",
         explanation="++x increments before printing"),
    dict(kind="mcq", topic="Methods", difficulty="easy",
         prompt="What is the return type of a method that does not return any value?",
         options=("null", "void", "empty", "none"),
         correct_answer="void",
         explanation="void indicates no return value"),
]

_C = [
    dict(kind="mcq", topic="Pointers", difficulty="medium",
         prompt="What does the & operator do in C?",
         options=("Dereference", "Address of", "AND operation", "Pointer declaration"),
         correct_answer="Address of",
         explanation="& returns the address of a variable"),
    dict(kind="code_output", topic="Variables", difficulty="easy",
         prompt="What is the output?",
         code_snippet='int x = 10;\nprintf("%d", x);',
         options=("10", "x", "0", "Error"),
         correct_answer="10",
         explanation="%d formats integer output"),
    dict(kind="mcq", topic="Arrays", difficulty="easy",
         prompt="How do you declare an integer array of size 10 in C?",
         options=("int arr[10]", "array int[10]", "int[] arr = 10", "int arr(10)"),
         correct_answer="int arr[10]",
         explanation="Standard array declaration in C"),
    dict(kind="code_output", topic="Loops", difficulty="medium",
         prompt="What is printed?",
         code_snippet='for(int i=1; i<=3; i++) {\n    printf("%d", i);\n}',
         options=("123", "012", "1234", "0123"),
         correct_answer="123",
         explanation="Loop runs from 1 to 3 inclusive"),
    dict(kind="mcq", topic="Functions", difficulty="easy",
         prompt="What is the return type of the main function?",
         options=("void", "int", "char", "float"),
         correct_answer="int",
         explanation="main typically returns int"),
    dict(kind="code_output", topic="Pointers", difficulty="hard",
         prompt="What is the output?",
         code_snippet='int x = 5;\nint *p = &x;\nprintf("%d", *p);',
         options=("5", "Address", "0", "Error"),
         correct_answer="5",
         explanation="*p dereferences the pointer to get value"),
    dict(kind="mcq", topic="Memory", difficulty="medium",
         prompt="Which function is used to allocate memory dynamically in C?",
         options=("alloc()", "malloc()", "new()", "memory()"),
         correct_answer="malloc()",
         explanation="malloc allocates memory on heap"),
    dict(kind="code_output", topic="Operators", difficulty="easy",
         prompt="What is the output?",
         code_snippet='int x = 7 % 3;\nprintf("%d", x);',
         options=("2", "1", "3", "0"),
         correct_answer="1",
         explanation="7 modulo 3 equals 1"),
    dict(kind="mcq", topic="Strings", difficulty="medium",
         prompt="How are strings terminated in C?",
         options=("null character", "space", "newline", "semicolon"),
         correct_answer="null character",
         explanation="Strings end with \\0"),
    dict(kind="code_output", topic="Conditionals", difficulty="medium",
         prompt="What will be printed?",
         code_snippet='int x = 10;\nif(x == 10) {\n    printf("A");\n} else {\n    printf("B");\n}',
         options=("A", "B", "AB", "Error"),
         correct_answer="A",
         explanation="Condition is true, prints A"),
    dict(kind="mcq", topic="Structures", difficulty="medium",
         prompt="Which keyword is used to define a structure in C?",
         options=("class", "struct", "type", "record"),
         correct_answer="struct",
         explanation="struct defines structures in C"),
    dict(kind="code_output", topic="Arrays", difficulty="medium",
         prompt="What is printed?",
         code_snippet='int arr[] = {1, 2, 3};\nprintf("%d", arr[1]);',
         options=("1", "2", "3", "Error"),
         correct_answer="2",
         explanation="Array indexing starts at 0"),
    dict(kind="mcq", topic="Preprocessor", difficulty="easy",
         prompt="What does #include do?",
         options=("Defines a function", "Includes a header file", "Declares a variable", "Creates a macro"),
         correct_answer="Includes a header file",
         explanation="#include adds header file contents"),
    dict(kind="code_output", topic="Functions", difficulty="hard",
         prompt="What is the output?",
         code_snippet='int add(int a, int b) {\n    return a + b;\n}\nint main() {\n    printf("%d", add(3, 4));\n    return 0;\n}',
         options=("7", "34", "3+4", "Error"),
         correct_answer="7",
         explanation="Function returns 3 + 4 = 7"),
    dict(kind="mcq", topic="Data Types", difficulty="easy",
         prompt="Which data type is used to store a single character in C?",
         options=("string", "char", "character", "text"),
         correct_answer="char",
         explanation="char stores single characters"),
]

_CATALOG: dict[str, list[dict]] = {"python": _PYTHON, "java": _JAVA, "c": _C}


def build_catalog(languages: tuple[str, ...] | None = None) -> list[Question]:
    """Return fresh Question records, numbered 1..N within each language."""
    selected = languages if languages is not None else tuple(_CATALOG)
    return [
        Question.new(language=language, order_index=i, **fields)
        for language in selected
        for i, fields in enumerate(_CATALOG[language], start=1)
    ]
