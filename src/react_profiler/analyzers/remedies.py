"""Fixed remediation snippets attached to recommendations.

Snippets are plain text (JavaScript/TSX) rendered verbatim by the report
formatters. Component-specific snippets are templates filled with the
component name.
"""

CODE_SPLITTING = """\
// Use React.lazy for code splitting
import React, { lazy, Suspense } from 'react';

const HeavyComponent = lazy(() => import('./HeavyComponent'));

function App() {
  return (
    <Suspense fallback={<div>Loading...</div>}>
      <HeavyComponent />
    </Suspense>
  );
}"""

DYNAMIC_IMPORT = """\
// Instead of:
// import HeavyLibrary from 'heavy-library';

// Use dynamic import:
const loadLibrary = async () => {
  const HeavyLibrary = await import('heavy-library');
  return HeavyLibrary.default;
};"""

DEDUPE_SPLIT_CHUNKS = """\
// In webpack.config.js
module.exports = {
  optimization: {
    splitChunks: {
      chunks: 'all',
      cacheGroups: {
        vendor: {
          test: /[\\\\/]node_modules[\\\\/]/,
          name: 'vendors',
          chunks: 'all',
        },
      },
    },
  },
};"""

MEMO_TEMPLATE = """\
// Wrap your component with React.memo
import React, { memo } from 'react';

const {name} = memo(({ /* props */ }) => {
  return (
    // Your component JSX
  );
});

// Or with custom comparison
const {name} = memo(
  ({ /* props */ }) => {
    // Component code
  },
  (prevProps, nextProps) => {
    // Return true if props are equal (skip render)
    return prevProps.id === nextProps.id;
  }
);"""

REDUCER_TEMPLATE = """\
// Instead of multiple setState calls:
// setName(newName);
// setAge(newAge);
// setEmail(newEmail);

// Use single state object or useReducer:
import { useReducer } from 'react';

const reducer = (state, action) => {
  switch (action.type) {
    case 'UPDATE_USER':
      return { ...state, ...action.payload };
    default:
      return state;
  }
};

function {name}() {
  const [state, dispatch] = useReducer(reducer, initialState);

  // Single dispatch instead of multiple setStates
  dispatch({
    type: 'UPDATE_USER',
    payload: { name: newName, age: newAge, email: newEmail }
  });
}"""

MEMOIZE_TEMPLATE = """\
import { useMemo, useCallback } from 'react';

function {name}({ data, onItemClick }) {
  // Memoize expensive calculations
  const processedData = useMemo(() => {
    return data.map(item => expensiveTransform(item));
  }, [data]);

  // Memoize callbacks to prevent child re-renders
  const handleClick = useCallback((id) => {
    onItemClick(id);
  }, [onItemClick]);

  return (
    <div>
      {processedData.map(item => (
        <Item key={item.id} data={item} onClick={handleClick} />
      ))}
    </div>
  );
}"""

DOM_CLEANUP = """\
import { useEffect, useRef } from 'react';

function MyComponent() {
  const elementRef = useRef<HTMLDivElement>(null);

  useEffect(() => {
    const element = elementRef.current;

    const handleClick = () => {
      // Handle click
    };

    element?.addEventListener('click', handleClick);

    // IMPORTANT: Clean up event listeners
    return () => {
      element?.removeEventListener('click', handleClick);
    };
  }, []);

  return <div ref={elementRef}>Content</div>;
}"""

LISTENER_CLEANUP = """\
import { useEffect } from 'react';

function MyComponent() {
  useEffect(() => {
    const handleScroll = () => {
      // Handle scroll
    };

    const handleResize = () => {
      // Handle resize
    };

    window.addEventListener('scroll', handleScroll);
    window.addEventListener('resize', handleResize);

    // Clean up ALL event listeners
    return () => {
      window.removeEventListener('scroll', handleScroll);
      window.removeEventListener('resize', handleResize);
    };
  }, []); // Empty deps = run once on mount

  return <div>Content</div>;
}"""

VIRTUALIZED_LIST = """\
// Use react-window for large lists
import { FixedSizeList } from 'react-window';

function MyList({ items }) {
  const Row = ({ index, style }) => (
    <div style={style}>
      {items[index].name}
    </div>
  );

  return (
    <FixedSizeList
      height={600}
      itemCount={items.length}
      itemSize={35}
      width="100%"
    >
      {Row}
    </FixedSizeList>
  );
}"""

LEAK_FIXES = {
    "consistent-growth": "Implement proper cleanup in useEffect hooks and remove event listeners",
    "large-increase": "Review state management and ensure components are properly unmounting",
    "detached-dom": "Clear DOM references and event listeners when components unmount",
    "event-listeners": "Always return cleanup functions from useEffect hooks",
}
DEFAULT_LEAK_FIX = "Review component lifecycle and cleanup logic"

LEAK_EXAMPLES = {
    "consistent-growth": """\
// Bad: Missing cleanup
useEffect(() => {
  const interval = setInterval(() => {
    // Do something
  }, 1000);
  // Missing: clearInterval(interval)
}, []);

// Good: Proper cleanup
useEffect(() => {
  const interval = setInterval(() => {
    // Do something
  }, 1000);

  return () => clearInterval(interval);
}, []);""",
    "detached-dom": """\
// Bad: Holding references
const elements = [];
function addElement() {
  const el = document.createElement('div');
  elements.push(el); // Memory leak!
}

// Good: Clear references
useEffect(() => {
  const element = document.getElementById('myEl');

  return () => {
    // Clear reference
    element?.remove();
  };
}, []);""",
}
DEFAULT_LEAK_EXAMPLE = "// See documentation for examples"


def component_snippet(template: str, name: str) -> str:
    """Fill a component template without tripping over JSX braces."""
    return template.replace("{name}", name)


def leak_fix(leak_type: str) -> str:
    return LEAK_FIXES.get(leak_type, DEFAULT_LEAK_FIX)


def leak_example(leak_type: str) -> str:
    return LEAK_EXAMPLES.get(leak_type, DEFAULT_LEAK_EXAMPLE)
